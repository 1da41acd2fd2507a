from .index import (
    AnalysisSettings,
    AnalyzerDefinition,
    IndexDefinition,
    IndexSettings,
    TokenizerDefinition,
)
from .mapping import PropertySchema, SchemaDocument, SubFieldSchema

__all__ = [
    "AnalysisSettings",
    "AnalyzerDefinition",
    "IndexDefinition",
    "IndexSettings",
    "TokenizerDefinition",
    "PropertySchema",
    "SchemaDocument",
    "SubFieldSchema",
]
