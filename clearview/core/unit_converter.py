"""
单位转换器 - 长度/重量/数据/时间/温度，以及货币汇率转换
"""
import logging
import re

import requests

logger = logging.getLogger(__name__)

EXCHANGE_RATE_URL = "https://api.exchangerate-api.com/v4/latest/{base}"


def fetch_exchange_rates(base, timeout=5):
	"""获取以 base 为基准的汇率表 {CODE: rate}"""
	resp = requests.get(EXCHANGE_RATE_URL.format(base=base.upper()), timeout=timeout)
	resp.raise_for_status()
	data = resp.json()
	rates = data.get("rates")
	if not isinstance(rates, dict):
		raise ValueError("汇率数据格式错误")
	return rates


class UnitConverter:
	"""单位转换器"""

	PATTERN = re.compile(r'^\s*([\d.]+)\s?([a-zA-Z]+)\s+to\s+([a-zA-Z]+)\s*$', re.IGNORECASE)

	# 转换规则（以各类别最小单位为基准）
	CONVERSIONS = {
		# 长度
		'length': {
			'mm': 1,
			'cm': 10,
			'm': 1000,
			'km': 1000000,
			'in': 25.4,
			'inch': 25.4,
			'ft': 304.8,
			'yd': 914.4,
			'yard': 914.4,
			'mi': 1609344,
			'mile': 1609344,
		},
		# 重量
		'weight': {
			'mg': 1,
			'g': 1000,
			'kg': 1000000,
			'oz': 28349.5,
			'lb': 453592,
		},
		# 数据大小
		'data': {
			'b': 1,
			'byte': 1,
			'kb': 1024,
			'mb': 1024**2,
			'gb': 1024**3,
			'tb': 1024**4,
		},
		# 时间
		'time': {
			'ms': 1,
			's': 1000,
			'min': 60000,
			'hour': 3600000,
			'day': 86400000,
		},
	}

	def __init__(self, rate_fetcher=fetch_exchange_rates):
		# rate_fetcher(base) -> {CODE: rate}; None disables currency conversion
		self.rate_fetcher = rate_fetcher

	@classmethod
	def is_conversion(cls, text):
		"""检测是否为单位转换请求，如 "100 km to mi" / "32F to C" / "10 usd to eur" """
		return bool(cls.PATTERN.match(text or ""))

	def convert(self, text):
		"""执行转换，返回结果字符串；无法转换时返回 None"""
		match = self.PATTERN.match(text or "")
		if not match:
			return None
		try:
			value = float(match.group(1))
		except ValueError:
			return None
		from_unit = match.group(2)
		to_unit = match.group(3)

		# 温度转换
		if from_unit.upper() in ('F', 'C', 'K') and to_unit.upper() in ('F', 'C', 'K'):
			result = self._convert_temperature(value, from_unit.upper(), to_unit.upper())
			return f"{result:.2f}°{to_unit.upper()}"

		f, t = from_unit.lower(), to_unit.lower()
		for category, units in self.CONVERSIONS.items():
			if f in units and t in units:
				result = value * units[f] / units[t]
				return f"{result:.2f} {t}"

		if len(f) == 3 and len(t) == 3 and f.isalpha() and t.isalpha():
			return self._convert_currency(value, f.upper(), t.upper())

		return None

	def _convert_currency(self, value, base, target):
		if self.rate_fetcher is None:
			return None
		try:
			rates = self.rate_fetcher(base)
		except (requests.RequestException, ValueError) as e:
			logger.info(f"汇率获取失败 {base}->{target}: {e}")
			return None
		rate = rates.get(target)
		if not isinstance(rate, (int, float)):
			return None
		return f"{value * rate:.2f} {target}"

	@staticmethod
	def _convert_temperature(value, from_unit, to_unit):
		"""温度转换"""
		if from_unit == to_unit:
			return value

		# 先转换为摄氏度
		if from_unit == 'F':
			celsius = (value - 32) * 5/9
		elif from_unit == 'K':
			celsius = value - 273.15
		else:
			celsius = value

		# 再转换为目标单位
		if to_unit == 'F':
			return celsius * 9/5 + 32
		elif to_unit == 'K':
			return celsius + 273.15
		else:
			return celsius
