# Services package

from hybrid_selector.services.cache import CacheWarmer, InMemoryCacheStore, IntelligentCache
from hybrid_selector.services.criterion_mapper import CriterionMapper
from hybrid_selector.services.file_selector import AIGuidedSelector
from hybrid_selector.services.fingerprinter import RepositoryFingerprinter
from hybrid_selector.services.hybrid import HybridSelector
from hybrid_selector.services.llm import AnthropicLanguageModel, LanguageModel
from hybrid_selector.services.semantic_analyzer import SemanticFileAnalyzer
from hybrid_selector.services.signature import RepoSignature, SignatureGenerator
from hybrid_selector.services.validation import ValidationEngine
from hybrid_selector.services.workflow import SelectionWorkflow

__all__ = [
    # Orchestration
    "HybridSelector",
    "SelectionWorkflow",
    # Tiers
    "IntelligentCache",
    "InMemoryCacheStore",
    "CacheWarmer",
    "RepositoryFingerprinter",
    "AIGuidedSelector",
    "ValidationEngine",
    # Heuristics
    "CriterionMapper",
    "SemanticFileAnalyzer",
    "SignatureGenerator",
    "RepoSignature",
    # Adapters
    "AnthropicLanguageModel",
    "LanguageModel",
]
