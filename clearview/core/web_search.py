"""
网页地址检测与网页搜索链接
"""
import urllib.parse

URL_SUFFIXES = ('.com', '.net', '.org', '.io', '.gov', '.edu')

SEARCH_URL = 'https://www.google.com/search?q={query}'


def is_likely_url(text):
	"""
	判断输入是否像网址

	示例:
	  "github.com"           -> True
	  "https://example.org"  -> True
	  "report.txt"           -> False
	  "my notes.com"         -> False (包含空格)
	"""
	text = (text or "").strip()
	if not text or ' ' in text:
		return False
	lower = text.lower()
	if lower.startswith(('http://', 'https://')):
		return len(lower.split('://', 1)[1]) > 0
	return '.' in lower and lower.endswith(URL_SUFFIXES)


def normalize_url(text):
	"""补全协议前缀"""
	text = text.strip()
	if not text.lower().startswith(('http://', 'https://')):
		return 'https://' + text
	return text


def web_search_url(query):
	"""生成网页搜索链接"""
	return SEARCH_URL.format(query=urllib.parse.quote(query.strip()))
