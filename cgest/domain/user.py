"""
User profile - display fields only
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class UserProfile:
    id: str
    email: str = ""
    name: Optional[str] = None
    avatar: Optional[str] = None  # data URL / link da foto
