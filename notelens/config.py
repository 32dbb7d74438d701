from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Storage settings
    local_note_repository_path: str = "data/notes.json"
    local_image_store_path: str = "data/images.json"

    # Worker pool settings
    search_max_workers: int = 5  # one worker per search strategy
    analysis_max_workers: int = 4  # bounds concurrent vision analyses

    # EasyOCR settings
    ocr_languages: list[str] = ["en"]
    ocr_use_gpu: bool = False

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL


settings = Settings()
