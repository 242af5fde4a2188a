# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.
"""
At-rest encryption for journal text.

Stories are private by default, so their bodies are stored as Fernet
tokens and only decrypted when a row is loaded.
"""

import os
from cryptography.fernet import Fernet
from sqlalchemy.types import TypeDecorator, Text

if os.getenv("ENV") != "production":
    from dotenv import load_dotenv
    load_dotenv()


def _load_story_cipher() -> Fernet:
    secret = os.getenv("FERNET_SECRET")
    if not secret:
        raise EnvironmentError("FERNET_SECRET is missing. Story text cannot be stored without it.")
    try:
        return Fernet(secret)
    except ValueError as e:
        raise ValueError("FERNET_SECRET must be a urlsafe base64-encoded 32-byte key.") from e


_story_cipher = _load_story_cipher()


class EncryptedText(TypeDecorator):
    """Text column holding a Fernet token, plain str on the Python side."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return _story_cipher.encrypt(value.encode("utf-8")).decode("ascii")

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return _story_cipher.decrypt(value.encode("ascii")).decode("utf-8")
