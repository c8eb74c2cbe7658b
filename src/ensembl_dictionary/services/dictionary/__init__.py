"""Dictionary sources.

:class:`EnsemblDictionary` answers dictionary queries (dictionary infos,
entries by ID, entries matching a string) from EBI Search's ``ensembl_gene``
domain, returning normalised ``{"items": [...]}`` results.
"""

from .base import DictionarySource, z_prop_prune
from .ensembl import EnsemblDictionary, EnsemblDictionaryConfig

__all__ = [
    "DictionarySource",
    "EnsemblDictionary",
    "EnsemblDictionaryConfig",
    "z_prop_prune",
]
