from unittest.mock import MagicMock

import requests


def fake_response(content: bytes = b"", status_code: int = 200):
    response = MagicMock()
    response.content = content
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Client Error")
    return response
