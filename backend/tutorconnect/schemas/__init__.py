from .booking import BookingRequestCreate, BookingResponse
from .conversation import ConversationResponse
from .message import FileAttachmentResponse, FileRecord, MessageCreate, MessageResponse
from .notification import NotificationResponse
from .session import StudentRollupResponse, StudentSessionRecordResponse, TutoringSessionResponse

__all__ = [
    "BookingRequestCreate",
    "BookingResponse",
    "ConversationResponse",
    "FileAttachmentResponse",
    "FileRecord",
    "MessageCreate",
    "MessageResponse",
    "NotificationResponse",
    "StudentRollupResponse",
    "StudentSessionRecordResponse",
    "TutoringSessionResponse",
]
