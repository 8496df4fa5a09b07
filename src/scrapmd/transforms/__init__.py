#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Semantic passes over parsed pages and the registry that names them."""

from scrapmd.transforms.builtin import FlattenCodeBlockListTransform, HeadingMappingTransform, PageTransform
from scrapmd.transforms.registry import (
    TransformMetadata,
    TransformRegistry,
    apply_transforms,
    transform_registry,
)

__all__ = [
    "FlattenCodeBlockListTransform",
    "HeadingMappingTransform",
    "PageTransform",
    "TransformMetadata",
    "TransformRegistry",
    "apply_transforms",
    "transform_registry",
]
