# promptfit/images/__init__.py
"""Image normalization and validation."""

from promptfit.images.normalizer import DEFAULT_MIME_TYPE, normalize_image, validate_images

__all__ = ["DEFAULT_MIME_TYPE", "normalize_image", "validate_images"]
