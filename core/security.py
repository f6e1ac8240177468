"""Evidence Manager - Security Utilities
Password hashing, JWT issuing/decoding and evidence image validation.
"""

import re
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from jose import JWTError, jwt
from loguru import logger
from passlib.context import CryptContext

from core.config import api_settings, storage_settings


# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TOKEN_TYPE = "Bearer"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash password."""
    return pwd_context.hash(password)


def create_access_token(
    data: dict, expires_delta: timedelta | None = None
) -> tuple[str, datetime]:
    """Create JWT access token. Returns the token and its expiry."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=api_settings.jwt_expire_minutes)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(
        to_encode,
        api_settings.jwt_secret,
        algorithm=api_settings.jwt_algorithm,
    )
    return encoded_jwt, expire


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode and verify a JWT. Returns None for any invalid token."""
    try:
        return jwt.decode(
            token,
            api_settings.jwt_secret,
            algorithms=[api_settings.jwt_algorithm],
        )
    except JWTError:
        return None


# Evidence images only
ALLOWED_IMAGE_TYPES = {
    "image/jpeg",
    "image/pjpeg",
    "image/png",
    "image/gif",
    "image/bmp",
    "image/webp",
    "image/tiff",
}

ALLOWED_IMAGE_EXTENSIONS = {
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".bmp",
    ".webp",
    ".tif",
    ".tiff",
}

# Dangerous patterns in filenames
DANGEROUS_PATTERNS = [
    r"\.\.",  # Path traversal
    r"[<>:\"|?*]",  # Windows reserved characters
    r"[\x00-\x1f]",  # Control characters
]

# Magic byte signatures of the allowed image formats
IMAGE_SIGNATURES = {
    b"\x89PNG": {".png"},
    b"\xff\xd8\xff": {".jpg", ".jpeg"},
    b"GIF87a": {".gif"},
    b"GIF89a": {".gif"},
    b"BM": {".bmp"},
    b"II*\x00": {".tif", ".tiff"},
    b"MM\x00*": {".tif", ".tiff"},
}


def image_extension(filename: str) -> str:
    """Lower-cased extension of an uploaded file name, dot included."""
    return Path(filename).suffix.lower()


class ImageValidator:
    """Validates uploaded evidence images."""

    def __init__(
        self,
        max_size: int | None = None,
        allowed_types: set[str] | None = None,
        allowed_extensions: set[str] | None = None,
    ):
        self.max_size = max_size or storage_settings.max_image_size_bytes
        self.allowed_types = allowed_types or ALLOWED_IMAGE_TYPES
        self.allowed_extensions = allowed_extensions or ALLOWED_IMAGE_EXTENSIONS

    def validate(
        self,
        filename: str,
        content_type: str | None,
        content: bytes,
    ) -> str | None:
        """Validate an image upload.

        Returns:
            An error message, or None when the upload is acceptable
        """
        if not content:
            return "Image is empty"

        error = self._validate_filename(filename)
        if error:
            return error

        ext = image_extension(filename)
        if not ext:
            return "Image must have an extension"
        if ext not in self.allowed_extensions:
            return f"Image type '{ext}' is not allowed"

        if len(content) > self.max_size:
            max_mb = self.max_size / (1024 * 1024)
            return f"Image size exceeds maximum allowed ({max_mb:.0f}MB)"

        if content_type and content_type not in self.allowed_types:
            return f"Content type '{content_type}' is not allowed"

        return self._validate_magic_bytes(content, ext)

    def _validate_filename(self, filename: str) -> str | None:
        """Check filename for dangerous patterns."""
        if not filename:
            return "Image must have a file name"

        for pattern in DANGEROUS_PATTERNS:
            if re.search(pattern, filename):
                return "Filename contains invalid characters or patterns"

        if len(filename) > 255:
            return "Filename too long (max 255 characters)"

        return None

    def _validate_magic_bytes(self, content: bytes, ext: str) -> str | None:
        for magic, extensions in IMAGE_SIGNATURES.items():
            if content.startswith(magic):
                if ext not in extensions:
                    return f"File content does not match extension '{ext}'"
                return None

        # Unknown signature (webp, text) is accepted
        logger.debug(f"No known image signature for extension {ext}")
        return None


# Default validator instance
image_validator = ImageValidator()
