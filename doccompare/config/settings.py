from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pymupdf"

    scanned_text_threshold: int = 100
    precheck_sample_pages: int = 2
    precheck_scanned_threshold: int = 50
    ocr_page_hard_limit: int = 50
    text_pdf_page_limit: int = 1000

    row_tolerance: float = 3.0
    column_gap_threshold: float = 15.0
    word_gap_threshold: float = 1.0

    ocr_language: str = "eng"
    ocr_render_dpi: int = 150
    ocr_min_confidence: float = 40.0
    ocr_min_alnum_ratio: float = 0.3
    ocr_short_line_max_length: int = 2
    ocr_short_line_min_confidence: float = 70.0
    ocr_yield_every_pages: int = 1
