from app.models.conversation_message import ConversationMessage
from app.models.conversation_session import ConversationSession

__all__ = [
    "ConversationMessage",
    "ConversationSession",
]
