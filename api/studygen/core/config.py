from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    otel_enabled: bool = False

    llm_base_url: str = "https://api.openai.com/v1"
    llm_api_key: str = ""  # set it in the .env file
    llm_model: str = "gpt-3.5-turbo"
    llm_timeout_s: float = 60.0
    min_api_key_length: int = 10

    flashcard_temperature: float = 0.8
    flashcard_max_tokens: int = 2000
    flashcard_presence_penalty: float = 0.2
    flashcard_frequency_penalty: float = 0.3

    quiz_temperature: float = 0.7
    quiz_max_tokens: int = 1500

    requested_flashcards: int = 6
    requested_quiz_questions: int = 6
    max_flashcards: int = 8  # model output is truncated to this many cards
    source_content_max_chars: int = 2000

    max_upload_bytes: int = 10 * 1024 * 1024


settings = Settings()
