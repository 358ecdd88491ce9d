"""Rules first, chat model second."""

from __future__ import annotations

from typing import Optional

from app.infra.logging_config import get_logger
from app.schemas.intent import IntentResult
from app.services.llm_classifier import LLMClassifierAdapter
from app.services.rule_classifier import RuleBasedClassifier

logger = get_logger(__name__)


class IntentClassifier:
    def __init__(
        self,
        llm_classifier: LLMClassifierAdapter,
        rule_classifier: Optional[RuleBasedClassifier] = None,
    ) -> None:
        self._rules = rule_classifier or RuleBasedClassifier()
        self._llm = llm_classifier

    async def classify(
        self, text: Optional[str], conversation_context: Optional[str] = None
    ) -> IntentResult:
        """
        Classify ``text``. A keyword match returns without any await; only
        unmatched text reaches the chat model.
        """
        result = self._rules.classify(text)
        if result is not None:
            logger.debug("Rule match for context %s: %s", conversation_context, result.action_codes)
            return result
        return await self._llm.classify_with_model(text or "", conversation_context)
