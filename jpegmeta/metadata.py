# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Metadata result container

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class MetadataResult:
    """
    Metadata decoded from one JPEG file.

    The result is read-only: the tag maps are exposed as mapping proxies
    and repeated IPTC values as tuples, so a caller cannot alter what
    parse() returned.
    """
    exif: Mapping[str, Any] = field(default_factory=dict)
    gps: Mapping[str, Any] = field(default_factory=dict)
    iptc: Mapping[str, Any] = field(default_factory=dict)
    thumbnail: Optional[bytes] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, 'exif', MappingProxyType(dict(self.exif)))
        object.__setattr__(self, 'gps', MappingProxyType(dict(self.gps)))
        object.__setattr__(self, 'iptc', MappingProxyType({
            name: tuple(value) if isinstance(value, list) else value
            for name, value in self.iptc.items()
        }))

    def is_empty(self) -> bool:
        """True when no tag and no thumbnail was found."""
        return not (self.exif or self.gps or self.iptc or self.thumbnail)

    def to_dict(self) -> Dict[str, Any]:
        """
        Return the metadata as nested plain dictionaries.

        The thumbnail is reported by size only; repeated IPTC values
        become lists.
        """
        return {
            'exif': dict(self.exif),
            'gps': dict(self.gps),
            'iptc': _iptc_lists(self.iptc),
            'thumbnail': len(self.thumbnail) if self.thumbnail is not None else None,
        }

    def flatten(self) -> Dict[str, Any]:
        """
        Return all tags in one dictionary with group-prefixed names.

        Example: {'EXIF:Make': 'Canon', 'GPS:GPSLatitudeRef': 'N', 'IPTC:Keywords': [...]}
        """
        flat: Dict[str, Any] = {}
        for group, tags in (('EXIF', self.exif), ('GPS', self.gps), ('IPTC', _iptc_lists(self.iptc))):
            for name, value in tags.items():
                flat[f"{group}:{name}"] = value
        if self.thumbnail is not None:
            flat['EXIF:ThumbnailImage'] = f"(Binary data {len(self.thumbnail)} bytes)"
        return flat


def _iptc_lists(iptc: Mapping[str, Any]) -> Dict[str, Any]:
    # EXIF short pairs are tuples too, so only IPTC values are converted
    return {name: list(value) if isinstance(value, tuple) else value for name, value in iptc.items()}
