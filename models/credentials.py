from pydantic import BaseModel, Field


class TelegramCredentials(BaseModel):
    token: str = Field(..., min_length=1, description="Telegram bot token")
    chat_id: int = Field(..., description="Destination chat ID")
