"""Configuration helpers for rtfilter.

Filter designs are produced offline and stored as small YAML descriptors
(``filter.yaml``) holding the order, design rate, and coefficients. The
helpers here turn those descriptors into immutable
:class:`~rtfilter.core.models.FilterSpec` objects and back.
"""

from .filter_config import load_filter_spec, save_filter_spec, spec_from_mapping, spec_to_mapping

__all__ = ["load_filter_spec", "save_filter_spec", "spec_from_mapping", "spec_to_mapping"]
