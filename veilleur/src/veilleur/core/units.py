"""
Build units and emissions.

An emission is one pass of the build pipeline: a list of build units
plus the assets (compiled output files) they reference.
"""

import os
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, Iterable, List, Tuple, Union

from veilleur.core.exceptions import AssetNotFoundError

AssetSource = Union[str, Callable[[], str]]


@dataclass(frozen=True)
class BuildUnit:
    """
    Named, versioned group of compiled output.

    Attributes:
        name: Unit name (test units contain the test marker, e.g. "a.test")
        fingerprint: Opaque comparable content version (usually a hash)
        files: Asset names produced by the unit, in emission order
    """

    name: str
    fingerprint: Hashable
    files: Tuple[str, ...] = ()


@dataclass
class Emission:
    """
    One emission cycle of the build pipeline.

    Assets are either source text or zero-argument callables returning it,
    so sources can be produced on demand.
    """

    units: List[BuildUnit] = field(default_factory=list)
    assets: Dict[str, AssetSource] = field(default_factory=dict)

    def unit_names(self) -> List[str]:
        """Unit names in emission order."""
        return [unit.name for unit in self.units]

    def read_source(self, asset: str) -> str:
        """
        Retrieve an asset's source text.

        Args:
            asset: Asset name as listed in BuildUnit.files

        Returns:
            Source text

        Raises:
            AssetNotFoundError: If the emission has no such asset
        """
        try:
            source = self.assets[asset]
        except KeyError:
            raise AssetNotFoundError(asset) from None

        return source() if callable(source) else source


def extract_sources(
    output_path: str, emission: Emission, units: Iterable[BuildUnit]
) -> Dict[str, str]:
    """
    Collect the sources of every file produced by the given units.

    Files shared between units are kept once, at their first position.

    Args:
        output_path: Pipeline output directory
        emission: Current emission
        units: Units whose files should be extracted

    Returns:
        Ordered mapping of normalized output path to source text
    """
    sources: Dict[str, str] = {}

    for unit in units:
        for asset in unit.files:
            path = os.path.normpath(os.path.join(output_path, asset))
            if path not in sources:
                sources[path] = emission.read_source(asset)

    return sources
