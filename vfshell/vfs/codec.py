"""
Best-effort decoding of file payloads.

File contents in a VFS source are usually base64, but plain text is
accepted as well: anything that is not valid base64 (or does not decode
to UTF-8 text) is returned unchanged.
"""

import base64
import binascii


def decode_content(content: str) -> str:
    """Decode a base64 payload, falling back to the raw text.

    Line breaks inside the payload are ignored. Never raises.
    """
    try:
        data = base64.b64decode(content.replace('\r', '').replace('\n', ''), validate=True)
        return data.decode('utf-8')
    except (binascii.Error, ValueError):
        return content
