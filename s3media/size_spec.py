"""
SizeSpec and UploadSettings - Declarative resize and encoding configuration.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .classifier import HASH_PREFIX_CONVENTION, NO_CONVENTION

FLAT_LAYOUT = 'flat'
FORMAT_SUBFOLDER_LAYOUT = 'format_subfolder'

OPTIMIZE_FORMATS = ('jpeg', 'png', 'webp', 'avif', 'tiff')


@dataclass(frozen=True)
class SizeSpec:
    """
    One resize tier.
    
    Attributes:
        name: Unique tier name, used as the key folder (e.g., 'small')
        resize_options: Target width/height/fit, passed to the codec as-is
        generate_webp: Also produce a webp encoding of this tier
        generate_avif: Also produce an avif encoding of this tier
    """
    name: str
    resize_options: Dict[str, Any] = field(default_factory=dict)
    generate_webp: bool = False
    generate_avif: bool = False
    
    @property
    def width(self) -> Optional[int]:
        return self.resize_options.get('width') or None
    
    @property
    def height(self) -> Optional[int]:
        return self.resize_options.get('height') or None
    
    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'resizeOptions': dict(self.resize_options),
            'isGenerateWebp': self.generate_webp,
            'isGenerateAvif': self.generate_avif,
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> 'SizeSpec':
        """Create from dictionary, accepting camelCase or snake_case keys."""
        resize_options = data.get('resizeOptions', data.get('resize_options')) or {}
        return cls(
            name=data['name'],
            resize_options=dict(resize_options),
            generate_webp=bool(data.get('isGenerateWebp', data.get('generate_webp', False))),
            generate_avif=bool(data.get('isGenerateAvif', data.get('generate_avif', False))),
        )


@dataclass(frozen=True)
class UploadSettings:
    """
    Process-wide upload configuration, read-only once built.
    
    Attributes:
        image_sizes: Ordered resize tiers
        optimize_options: Encoder options keyed by format name
            ('jpeg', 'png', 'webp', 'avif', 'tiff'), passed through verbatim
        alternate_layout: Where webp/avif variants live; 'flat' puts them
            beside the primary variant, 'format_subfolder' under '<fmt>/'
        naming_convention: 'hash_prefix' to treat 'thumbnail_'/'small_'
            hashes as derived thumbnails, 'none' to disable
    """
    image_sizes: List[SizeSpec] = field(default_factory=list)
    optimize_options: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    alternate_layout: str = FLAT_LAYOUT
    naming_convention: str = HASH_PREFIX_CONVENTION
    
    def validate(self) -> List[str]:
        """Validate settings, returning a list of error messages."""
        errors = []
        
        names = [size.name for size in self.image_sizes]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            errors.append(f"Duplicate image size names: {', '.join(duplicates)}")
        if any(not name for name in names):
            errors.append("Image size names must not be empty")
        if self.alternate_layout not in (FLAT_LAYOUT, FORMAT_SUBFOLDER_LAYOUT):
            errors.append(f"Unknown alternate_layout: {self.alternate_layout}")
        if self.naming_convention not in (HASH_PREFIX_CONVENTION, NO_CONVENTION):
            errors.append(f"Unknown naming_convention: {self.naming_convention}")
        unknown = sorted(set(self.optimize_options) - set(OPTIMIZE_FORMATS))
        if unknown:
            errors.append(f"Unknown optimize option formats: {', '.join(unknown)}")
        
        return errors
    
    def options_for(self, fmt: Optional[str]) -> Dict[str, Any]:
        """Encoder options for a format, empty if none configured."""
        if fmt is None:
            return {}
        return dict(self.optimize_options.get(fmt) or {})
    
    def to_dict(self) -> dict:
        return {
            'imageSizes': [size.to_dict() for size in self.image_sizes],
            'optimizeOptions': {k: dict(v) for k, v in self.optimize_options.items()},
            'alternateLayout': self.alternate_layout,
            'namingConvention': self.naming_convention,
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> 'UploadSettings':
        """Create from dictionary (camelCase or snake_case keys)."""
        sizes = data.get('imageSizes', data.get('image_sizes')) or []
        optimize = data.get('optimizeOptions', data.get('optimize_options')) or {}
        return cls(
            image_sizes=[SizeSpec.from_dict(size) for size in sizes],
            optimize_options={k: dict(v or {}) for k, v in optimize.items()},
            alternate_layout=data.get('alternateLayout', data.get('alternate_layout', FLAT_LAYOUT)),
            naming_convention=data.get(
                'namingConvention', data.get('naming_convention', HASH_PREFIX_CONVENTION)
            ),
        )
    
    @classmethod
    def load(cls, filepath: str) -> 'UploadSettings':
        """Load settings from a JSON file."""
        with open(Path(filepath), 'r') as f:
            return cls.from_dict(json.load(f))
