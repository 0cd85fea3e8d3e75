"""ontoschema - Hierarchical validation-schema compiler for typed ontology terms.

ontoschema merges the constraints of a term's type-of ancestry with per-field
descriptor options into a validation record, and lowers it into a rule tree
usable both to check values and to decorate form metadata.
"""

__version__ = "0.1.0"
__author__ = "ontoschema contributors"
__description__ = "Hierarchical validation-schema compiler for typed ontology terms"

from ontoschema.config import OntoschemaConfig

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "OntoschemaConfig",
]
