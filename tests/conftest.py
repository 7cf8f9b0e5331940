import copy

import pytest

from architect.errors import ServiceFailure
from architect.states import GenerationResult

LOGIN_CARD_PAYLOAD = {
    "template": "<div></div>",
    "typescript": "class X {}",
    "success": True,
    "iterations": 1,
    "validation": {"is_valid": True, "errors": [], "warnings": [], "passed": ["ok"]},
    "audit_trail": [{"attempt": 1, "validation": {"is_valid": True, "errors": []}}],
}

RETRIED_PAYLOAD = {
    "template": "<form><button (click)=\"save()\">Save</button></form>",
    "typescript": "@Component({ standalone: true })\nexport class SaveFormComponent {}",
    "success": False,
    "iterations": 3,
    "validation": {
        "is_valid": False,
        "errors": ["Unauthorized color: #123456"],
        "warnings": ["No aria-label on button"],
        "passed": ["Curly braces balanced", "Component class exported", "Tailwind layout", "Standalone"],
    },
    "audit_trail": [
        {"attempt": 1, "validation": {"is_valid": False, "errors": ["Missing @Component decorator", "Unauthorized color: #123456"]}},
        {"attempt": 2, "validation": {"is_valid": False, "errors": ["Unauthorized color: #123456"]}},
        {"attempt": 3, "validation": {"is_valid": False, "errors": ["Unauthorized color: #123456"]}},
    ],
}


def make_result(payload=None, **overrides) -> GenerationResult:
    data = copy.deepcopy(payload or LOGIN_CARD_PAYLOAD)
    data.update(overrides)
    return GenerationResult.model_validate(data)


class FakeService:
    """
    Scripted GenerationService: each call pops the next outcome, either a
    GenerationResult to return or an exception to raise.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []
        self.on_call = None

    async def generate(self, prompt, session_id):
        self.calls.append((prompt, session_id))
        if self.on_call is not None:
            await self.on_call(prompt)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def login_result():
    return make_result()


@pytest.fixture
def retried_result():
    return make_result(RETRIED_PAYLOAD)


@pytest.fixture
def server_error():
    return ServiceFailure(500)
