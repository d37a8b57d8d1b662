"""
API Routes Package
"""
from . import (
    health,
    uploads,
    posts,
    payments,
    plans,
)
