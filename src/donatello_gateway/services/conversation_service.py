"""Conversation orchestration: validate, upload, chat and record messages."""

import logging
from typing import List, Optional

from ..clients.backend_client import BackendClient
from ..config import Settings
from ..errors import (
    ConversationBusyError,
    ErrorKind,
    GatewayError,
    InvalidFileError,
    UploadError,
)
from ..models.chat import ChatMessage, ChatRole
from ..models.upload import ImageFile, UploadResult
from .prompts import CLEARED_MESSAGE, WELCOME_MESSAGE, build_chat_prompt
from .validation import validate_image_file

logger = logging.getLogger(__name__)


class ConversationService:
    """Holds one chat session and sequences every send.

    Messages live in memory only and are append-only. At most one send is in
    flight at a time; a second call while busy raises ConversationBusyError.
    """

    def __init__(
        self,
        backend_client: BackendClient,
        settings: Settings,
        greeting: Optional[str] = WELCOME_MESSAGE,
    ):
        self.backend_client = backend_client
        self.settings = settings
        self.messages: List[ChatMessage] = []
        self.is_loading = False
        self.is_healthy = True

        if greeting:
            self._append(ChatRole.ASSISTANT, greeting)

    def _append(
        self,
        role: ChatRole,
        content: str,
        image_context: Optional[UploadResult] = None,
    ) -> ChatMessage:
        message = ChatMessage(role=role, content=content, image_context=image_context)
        self.messages.append(message)
        return message

    async def check_health(self) -> None:
        """Refresh the ``is_healthy`` flag from the backend health endpoint."""
        try:
            await self.backend_client.check_health()
            self.is_healthy = True
            logger.info("✅ Backend is healthy")
        except GatewayError as e:
            self.is_healthy = False
            logger.warning(f"⚠️ Backend health check failed: {e.message}")

    def clear_messages(self) -> None:
        self.messages = []
        self._append(ChatRole.ASSISTANT, CLEARED_MESSAGE)

    async def send_message(
        self, message: str, image_file: Optional[ImageFile] = None
    ) -> None:
        """Send a user message, optionally with an image, and record the reply.

        Every failure ends as an assistant message; nothing is raised except
        ConversationBusyError when another send has not settled yet.
        """
        if not message.strip() and image_file is None:
            return
        if self.is_loading:
            raise ConversationBusyError()

        self.is_loading = True
        try:
            user_content = message or f"🎨 Uploading and analyzing: {image_file.filename}"
            user_message = self._append(ChatRole.USER, user_content)
            await self._process(message, image_file, user_message)
        finally:
            self.is_loading = False

    async def _process(
        self,
        message: str,
        image_file: Optional[ImageFile],
        user_message: ChatMessage,
    ) -> None:
        upload: Optional[UploadResult] = None

        try:
            if image_file is not None:
                validation = validate_image_file(
                    image_file, self.settings.max_image_size_bytes
                )
                if not validation.is_valid:
                    raise InvalidFileError(validation.error, validation.kind)

                logger.info("📤 Uploading image to Walrus...")
                upload = await self.backend_client.upload_image(image_file)
                user_message.image_context = upload

            prompt = build_chat_prompt(
                message,
                upload,
                filename=image_file.filename if image_file else None,
                direct_url=(
                    self.backend_client.get_direct_walrus_url(upload.image_blob_id)
                    if upload
                    else None
                ),
            )

            logger.info("🤖 Sending to Gemini AI...")
            reply = await self.backend_client.send_chat_message(prompt, upload)
        except UploadError as e:
            logger.error(f"❌ Upload error: {e.message}")
            self._append(ChatRole.ASSISTANT, self._troubleshooting_text(e.message))
            return
        except GatewayError as e:
            logger.error(f"❌ Chat error: {e.message}")
            self._append(ChatRole.ASSISTANT, self._error_text(e))
            if e.kind is ErrorKind.CONNECTIVITY:
                self.is_healthy = False
            return

        self._append(ChatRole.ASSISTANT, reply.response, image_context=upload)
        logger.info("✅ Gemini AI response received")

    def _troubleshooting_text(self, reason: str) -> str:
        return (
            f"❌ {reason}\n\n🔍 Make sure your backend is running on "
            f"{self.settings.backend_base}"
        )

    def _error_text(self, error: GatewayError) -> str:
        if error.kind is ErrorKind.INVALID_FILE_TYPE:
            return (
                f"❌ {error.message}\n\n"
                "Please upload a PNG, JPG, JPEG, GIF, BMP, or WEBP file."
            )
        if error.kind is ErrorKind.FILE_TOO_LARGE:
            limit = self.settings.max_image_size_bytes // (1024 * 1024)
            return f"❌ {error.message}\n\nPlease choose a smaller image (max {limit}MB)."
        if error.kind is ErrorKind.CONNECTIVITY:
            return self._troubleshooting_text(error.message)
        return f"❌ {error.message}"
