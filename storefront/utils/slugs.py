import re
import unicodedata
from typing import Optional

def slugify(value: Optional[str]) -> str:
    """'Téléphones & Tablettes' -> 'telephones-tablettes'."""
    normalized = (
        unicodedata.normalize("NFKD", value or "")
        .encode("ascii", "ignore")
        .decode("ascii")
        .lower()
    )
    return re.sub(r"[^a-z0-9]+", "-", normalized).strip("-")
