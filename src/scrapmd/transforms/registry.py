#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/transforms/registry.py
"""Transform registry for looking up passes by name.

Passes are registered with a factory that builds an instance from a
``ConversionConfig``, so the command line can name passes while the
configuration still decides how they behave.

Examples
--------
Get a transform:

    >>> from scrapmd.transforms import transform_registry
    >>> transformer = transform_registry.get_transform("heading-mapping")

List all transforms:

    >>> for name in transform_registry.list_transforms():
    ...     print(name, transform_registry.get_metadata(name).description)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from scrapmd.ast.nodes import Page
from scrapmd.exceptions import TransformError
from scrapmd.options.config import ConversionConfig
from scrapmd.transforms.builtin import FlattenCodeBlockListTransform, HeadingMappingTransform, PageTransform

logger = logging.getLogger(__name__)

TransformFactory = Callable[[ConversionConfig], PageTransform]


@dataclass(frozen=True)
class TransformMetadata:
    """Registration record of a transform.

    Parameters
    ----------
    name : str
        Name used to request the transform
    description : str
        One-line description for listings
    factory : callable
        Builds the transform from a ``ConversionConfig``

    """

    name: str
    description: str
    factory: TransformFactory

    def create_instance(self, config: ConversionConfig) -> PageTransform:
        try:
            return self.factory(config)
        except (TypeError, ValueError) as e:
            raise TransformError(f"Cannot create transform '{self.name}': {e}", self.name, e) from e


class TransformRegistry:
    """Registry for managing page transforms.

    This singleton class holds every known transform. The built-in passes are
    registered when the module is imported.
    """

    _instance: Optional[TransformRegistry] = None
    _transforms: dict[str, TransformMetadata]

    def __new__(cls) -> TransformRegistry:
        """Create or return singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._transforms = {}
        return cls._instance

    def register(self, metadata: TransformMetadata) -> None:
        """Register a transform, replacing any previous one of the same name."""
        if metadata.name in self._transforms:
            logger.warning("Transform '%s' already registered, overwriting", metadata.name)
        self._transforms[metadata.name] = metadata
        logger.debug("Registered transform: %s", metadata.name)

    def unregister(self, name: str) -> bool:
        """Unregister a transform; return False if it was not registered."""
        if name in self._transforms:
            del self._transforms[name]
            logger.debug("Unregistered transform: %s", name)
            return True
        return False

    def get_metadata(self, name: str) -> TransformMetadata:
        """Get the registration record of a transform.

        Raises
        ------
        TransformError
            If no transform has that name

        """
        if name not in self._transforms:
            available = ", ".join(sorted(self._transforms)) or "none"
            raise TransformError(f"Transform '{name}' not registered (available: {available})", name)
        return self._transforms[name]

    def get_transform(self, name: str, config: Optional[ConversionConfig] = None) -> PageTransform:
        """Build a transform by name.

        Parameters
        ----------
        name : str
            Transform name
        config : ConversionConfig, optional
            Configuration the transform is built from; defaults apply if omitted

        Returns
        -------
        PageTransform
            A fresh transform instance

        Raises
        ------
        TransformError
            If the transform is unknown or cannot be built

        """
        return self.get_metadata(name).create_instance(config or ConversionConfig())

    def has_transform(self, name: str) -> bool:
        return name in self._transforms

    def list_transforms(self) -> list[str]:
        """Return the registered transform names, sorted."""
        return sorted(self._transforms)


transform_registry = TransformRegistry()

transform_registry.register(
    TransformMetadata(
        name=HeadingMappingTransform.name,
        description="Turn stacked bold markers into headings",
        factory=lambda config: HeadingMappingTransform(config.heading1_mapping, config.bold_to_heading),
    )
)
transform_registry.register(
    TransformMetadata(
        name=FlattenCodeBlockListTransform.name,
        description="Hoist code blocks out of lists",
        factory=lambda config: FlattenCodeBlockListTransform(),
    )
)


def apply_transforms(
    page: Page,
    transforms: Iterable[Union[str, PageTransform]],
    config: Optional[ConversionConfig] = None,
) -> Page:
    """Run each transform over ``page`` in order, one full walk per transform.

    Parameters
    ----------
    page : Page
        Page to rewrite in place
    transforms : iterable of str or PageTransform
        Transform names (resolved through the registry) or instances
    config : ConversionConfig, optional
        Configuration used to build transforms given by name

    Returns
    -------
    Page
        The rewritten page

    """
    for transform in transforms:
        if isinstance(transform, str):
            transform = transform_registry.get_transform(transform, config)
        page = transform.transform(page)
    return page
