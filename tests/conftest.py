"""
Pytest configuration and shared fixtures for the context store tests
"""
import pytest
from typing import Any, Dict, List

from slotted_context.errors import StorageError
from slotted_context.models.context_document import ContextDocument
from slotted_context.storage.memory import InMemoryStorage
from slotted_context.store.context_store import ContextStore
from slotted_context.utils.logging import setup_logging


class FlakyStorage(InMemoryStorage):
    """In-memory storage whose reads or writes can be made to fail on demand"""

    def __init__(self):
        super().__init__()
        self.fail_writes = False
        self.fail_reads = False
        self.writes = 0
        self.closed = False

    async def get(self, key):
        if self.fail_reads:
            raise StorageError("backend unreachable", key=key)
        return await super().get(key)

    async def set(self, key, value):
        if self.fail_writes:
            raise StorageError("write rejected", key=key)
        self.writes += 1
        await super().set(key, value)

    async def close(self):
        self.closed = True


class Recorder:
    """Subscriber that records every document it receives"""

    def __init__(self):
        self.documents: List[ContextDocument] = []

    def __call__(self, document: ContextDocument) -> None:
        self.documents.append(document)

    @property
    def count(self) -> int:
        return len(self.documents)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """Route structlog through stdlib logging on stderr for the whole run"""
    setup_logging(level="DEBUG", json_format=False)


@pytest.fixture
def storage():
    """Fresh in-memory storage"""
    return FlakyStorage()


@pytest.fixture
def store(storage):
    """Context store over in-memory storage, not yet initialized"""
    return ContextStore(storage)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def onboarding_data() -> Dict[str, Any]:
    """Onboarding form data as the wizard submits it (camelCase keys)"""
    return {
        "company": {
            "name": "Acme Corp",
            "industry": "SaaS",
            "size": "small",
            "description": "Workflow automation for small agencies",
            "website": "https://acme.example.com",
        },
        "brandDNA": {
            "valuePropositions": ["Save 10 hours a week", "No-code setup"],
            "coreOfferings": ["Automation builder", "Client portal"],
            "targetAudience": {
                "demographics": "Agency owners, 5-50 employees",
                "psychographics": "Growth-minded, time-poor",
                "painPoints": ["Manual reporting", "Client churn"],
            },
            "brandTone": {
                "personality": ["Friendly", "Expert"],
                "voiceAttributes": ["Clear", "Encouraging"],
                "communicationStyle": "conversational",
            },
        },
        "marketingGoals": {
            "primaryGoals": ["Generate leads", "Build authority"],
            "kpis": ["MQLs", "Organic traffic"],
            "cadence": "weekly",
            "channels": {
                "primary": ["LinkedIn", "Blog"],
                "secondary": ["Email"],
                "experimental": ["TikTok"],
            },
        },
        "gtmStrategy": {
            "segments": [
                {
                    "name": "Boutique agencies",
                    "description": "Under 10 staff",
                    "channels": ["LinkedIn"],
                    "messaging": "Punch above your weight",
                }
            ],
            "competitiveAdvantage": "Fastest setup in the market",
            "marketPosition": "Affordable automation for agencies",
        },
        "aiPersona": {
            "personalityTraits": ["Helpful", "Concise"],
            "communicationPattern": "Short paragraphs, active voice",
            "knowledgeAreas": ["Marketing automation", "Agency operations"],
            "constraints": ["No competitor bashing"],
        },
    }


@pytest.fixture
def acme_document(store, onboarding_data) -> ContextDocument:
    return store.create_initial_document(onboarding_data)
