import base64
import mimetypes
from pathlib import Path
from typing import Union


def to_data_uri(path: Union[str, Path]) -> str:
    """Inline an image file as a ``data:`` URI, the way covers are stored."""
    path = Path(path).expanduser()
    mime = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"
