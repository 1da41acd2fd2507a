from typing import Dict, Iterable, Optional, Set

from elasticorm.schemas import AnalysisSettings, AnalyzerDefinition, PropertySchema, SchemaDocument

from .tags import CASE_INSENSITIVE_ANALYZER

# Analyzers defined on the index when a field references them.
# Other analyzer names are expected to be built in or configured on the cluster.
ANALYZER_DEFINITIONS: Dict[str, AnalyzerDefinition] = {
    # Whole value as a single lowercased token, for case insensitive reference IDs
    CASE_INSENSITIVE_ANALYZER: AnalyzerDefinition(
        type="custom",
        tokenizer="keyword",
        filter=["lowercase"],
    ),
}


def collect_analyzers(document: SchemaDocument) -> Set[str]:
    """Distinct analyzer names used by the properties of a document, recursively."""
    analyzers: Set[str] = set()
    _collect(document.properties.values(), analyzers)
    return analyzers


def _collect(properties: Iterable[PropertySchema], analyzers: Set[str]) -> None:
    for prop in properties:
        if prop.analyzer:
            analyzers.add(prop.analyzer)
        if prop.properties:
            _collect(prop.properties.values(), analyzers)


def analysis_for(analyzers: Iterable[str], analysis: Optional[AnalysisSettings] = None) -> Optional[AnalysisSettings]:
    """
    Add definitions of known analyzers to an analysis block.

    Args:
        analyzers: Analyzer names referenced by the mapping
        analysis: Existing analysis block, created when a definition is added

    Returns:
        The analysis block, or None if there is nothing to define
    """
    for name in sorted(set(analyzers)):
        definition = ANALYZER_DEFINITIONS.get(name)
        if definition is None:
            continue
        if analysis is None:
            analysis = AnalysisSettings()
        if analysis.analyzer is None:
            analysis.analyzer = {}
        analysis.analyzer[name] = definition.model_copy(deep=True)
    return analysis
