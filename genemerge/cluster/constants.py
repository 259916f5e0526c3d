from ..util import WeakMergeNamespace


DEFAULTS = WeakMergeNamespace()
"""
- min_pseudogene_overlap_percent
"""
DEFAULTS.add(
    'min_pseudogene_overlap_percent',
    10.0,
    cast_type=float,
    defn='a pseudogene cluster is absorbed into a coding cluster when one of its exons overlaps a coding exon of the '
    'coding cluster by more than this percentage of the longest translation (in amino acids) of the coding cluster',
)
