"""
Service layer for MindLoom.

- MindMapSynthesizer: text -> canonical mind map tree
- TreeMutationEngine: transactional add / rename / replace on a shared tree
- ChangeTriggerPolicy: debounced regeneration on text changes
- MindMapSession, SessionManager: per-session orchestration
- ContentGenerator: text generation with model fallback
"""

from src.services.change_trigger import ChangeTriggerPolicy
from src.services.content_generator import ContentGenerator
from src.services.mutation_engine import TreeMutationEngine
from src.services.session import MindMapSession, SessionManager
from src.services.synthesizer import MindMapSynthesizer, default_tree, fallback_tree

__all__ = [
    "MindMapSynthesizer",
    "default_tree",
    "fallback_tree",
    "TreeMutationEngine",
    "ChangeTriggerPolicy",
    "MindMapSession",
    "SessionManager",
    "ContentGenerator",
]
