"""
Fortune generation schemas
"""

from typing import Optional

from app.schemas.common import CamelModel

class FortuneRequest(CamelModel):
    name: Optional[str] = None
    table_name: Optional[str] = None

class FortuneResponse(CamelModel):
    text: str
