from typing import Any

import simplejson
from fastapi.responses import JSONResponse


class DecimalJSONResponse(JSONResponse):
	"""JSON response that writes Decimal values as numbers with their exact text."""

	def render(self, content: Any) -> bytes:
		return simplejson.dumps(
			content,
			use_decimal=True,
			ensure_ascii=False,
			separators=(',', ':'),
		).encode('utf-8')
