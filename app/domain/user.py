"""User domain entity"""
from typing import Dict, Any


class User:
    @staticmethod
    def create(username: str, password_hash: str) -> Dict[str, Any]:
        return {
            "username": username,
            "password_hash": password_hash,
        }
