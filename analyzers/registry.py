from analyzers.keyword import KeywordNarrativeAnalyzer
from analyzers.pipeline import NarrativeAnalysisPipeline
from analyzers.remote import RemoteNarrativeAnalyzer

analyzer_registry = {
    "ai": RemoteNarrativeAnalyzer,
    "keyword": KeywordNarrativeAnalyzer,
}


def build_pipeline(primary: str = "ai", fallback: str = "keyword", **kwargs) -> NarrativeAnalysisPipeline:
    return NarrativeAnalysisPipeline(analyzer_registry[primary](), analyzer_registry[fallback](), **kwargs)
