"""
计算器功能 - 支持数学表达式计算
"""
import ast
import math
import operator
import re


class Calculator:
	"""数学表达式计算器"""

	# 支持的数学函数
	MATH_FUNCTIONS = {
		'sin': math.sin,
		'cos': math.cos,
		'tan': math.tan,
		'asin': math.asin,
		'acos': math.acos,
		'atan': math.atan,
		'sqrt': math.sqrt,
		'abs': abs,
		'ceil': math.ceil,
		'floor': math.floor,
		'round': round,
		'log': math.log,
		'log10': math.log10,
		'exp': math.exp,
	}

	# 数学常量
	CONSTANTS = {
		'pi': math.pi,
		'e': math.e,
	}

	BINARY_OPS = {
		ast.Add: operator.add,
		ast.Sub: operator.sub,
		ast.Mult: operator.mul,
		ast.Div: operator.truediv,
		ast.FloorDiv: operator.floordiv,
		ast.Mod: operator.mod,
		ast.Pow: operator.pow,
	}

	UNARY_OPS = {
		ast.UAdd: operator.pos,
		ast.USub: operator.neg,
	}

	MAX_EXPONENT = 1000
	# 整数结果的位数上限
	MAX_RESULT_BITS = 4096

	@classmethod
	def is_expression(cls, text):
		"""
		检测文本是否为数学表达式

		支持的格式:
		  - 基本运算: 2+2, 10*5, 100/4
		  - 括号: (2+3)*4
		  - 函数: sqrt(144), sin(45)
		  - 常量: pi, e
		单独的数字不算表达式（交给文件搜索）
		"""
		text = (text or "").strip()
		if not text:
			return False

		# 至少包含一个数字
		if not re.search(r'\d', text) and not any(c in text.lower() for c in cls.CONSTANTS):
			return False

		try:
			tree = ast.parse(text, mode='eval')
		except (SyntaxError, ValueError):
			return False

		body = tree.body
		if isinstance(body, (ast.Constant, ast.Name)):
			return False
		return cls._is_safe(body)

	@classmethod
	def _is_safe(cls, node):
		if isinstance(node, ast.Constant):
			return isinstance(node.value, (int, float)) and not isinstance(node.value, bool)
		if isinstance(node, ast.Name):
			return node.id.lower() in cls.CONSTANTS
		if isinstance(node, ast.BinOp):
			return type(node.op) in cls.BINARY_OPS and cls._is_safe(node.left) and cls._is_safe(node.right)
		if isinstance(node, ast.UnaryOp):
			return type(node.op) in cls.UNARY_OPS and cls._is_safe(node.operand)
		if isinstance(node, ast.Call):
			return (
				isinstance(node.func, ast.Name)
				and node.func.id.lower() in cls.MATH_FUNCTIONS
				and not node.keywords
				and all(cls._is_safe(a) for a in node.args)
			)
		return False

	@classmethod
	def _eval(cls, node):
		if isinstance(node, ast.Constant):
			return node.value
		if isinstance(node, ast.Name):
			return cls.CONSTANTS[node.id.lower()]
		if isinstance(node, ast.BinOp):
			left = cls._eval(node.left)
			right = cls._eval(node.right)
			cls._check_size(node.op, left, right)
			return cls.BINARY_OPS[type(node.op)](left, right)
		if isinstance(node, ast.UnaryOp):
			return cls.UNARY_OPS[type(node.op)](cls._eval(node.operand))
		if isinstance(node, ast.Call):
			func = cls.MATH_FUNCTIONS[node.func.id.lower()]
			return func(*[cls._eval(a) for a in node.args])
		raise ValueError("不支持的表达式")

	@classmethod
	def _check_size(cls, op, left, right):
		"""在计算前估算结果大小，过大的直接拒绝"""
		if isinstance(op, ast.Pow):
			if abs(right) > cls.MAX_EXPONENT:
				raise ValueError("指数过大")
			base = abs(left)
			if base > 1 and right > 0 and math.log2(base) * right > cls.MAX_RESULT_BITS:
				raise ValueError("结果过大")
		elif isinstance(op, ast.Mult):
			bits = sum(v.bit_length() for v in (left, right) if isinstance(v, int))
			if bits > cls.MAX_RESULT_BITS:
				raise ValueError("结果过大")

	@classmethod
	def calculate(cls, expression):
		"""
		计算数学表达式

		Args:
		    expression: 数学表达式字符串

		Returns:
		    (success: bool, result: float/str)
		    success=True 时 result 为计算结果
		    success=False 时 result 为错误信息
		"""
		try:
			expr = expression.strip()
			tree = ast.parse(expr, mode='eval')
			if not cls._is_safe(tree.body):
				return False, "错误: 不支持的表达式"

			result = cls._eval(tree.body)

			# 格式化结果
			if isinstance(result, complex):
				return False, "错误: 结果为复数"
			if isinstance(result, float):
				if math.isnan(result) or math.isinf(result):
					return False, "错误: 结果无效"
				# 如果是整数，显示为整数
				if result.is_integer():
					return True, int(result)
				# 否则保留合适的小数位
				return True, round(result, 10)

			return True, result

		except ZeroDivisionError:
			return False, "错误: 除数不能为零"
		except SyntaxError:
			return False, "错误: 表达式语法错误"
		except (ValueError, TypeError, OverflowError) as e:
			return False, f"错误: {str(e)}"

	@classmethod
	def evaluate(cls, text):
		"""快速路径入口：是表达式且计算成功时返回结果字符串，否则 None"""
		if not cls.is_expression(text):
			return None
		ok, result = cls.calculate(text)
		if not ok:
			return None
		try:
			return str(result)
		except ValueError:
			# 超出整数转字符串的位数限制
			return None
