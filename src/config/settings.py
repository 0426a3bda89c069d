"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use WEBFLOW_ prefix (e.g., WEBFLOW_DETECT_CYCLES=false).

Settings can also be loaded from a .env file in the project root.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use WEBFLOW_ prefix.

    Examples:
        WEBFLOW_UNICODE_IDENTIFIERS=true
        WEBFLOW_DETECT_CYCLES=false
        WEBFLOW_OUTPUT_SUFFIX=.htm
    """

    model_config = SettingsConfigDict(
        env_prefix="WEBFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # File configuration
    source_suffix: str = Field(
        default=".webf",
        description="Suffix of webflow source files",
    )

    output_suffix: str = Field(
        default=".html",
        description="Suffix given to compiled output files",
    )

    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to read sources and write output",
    )

    # Lexer configuration
    unicode_identifiers: bool = Field(
        default=False,
        description="Accept any case-bearing character in tag names, not only ASCII letters",
    )

    # Compilation configuration
    detect_cycles: bool = Field(
        default=True,
        description="Fail with CyclicImport when an import re-enters a file being resolved",
    )

    context_width: int = Field(
        default=40,
        description="Characters of source shown either side of an error position",
    )

    def outputName_make(self, input_name: str) -> str:
        """
        Derive the output file name for a source file name.

        Args:
            input_name: Source file name (e.g., "index.webf")

        Returns:
            File name with the source suffix swapped for the output suffix

        Example:
            >>> settings = AppSettings()
            >>> settings.outputName_make("index.webf")
            'index.html'
        """
        return Path(input_name).with_suffix(self.output_suffix).name


# Singleton instance - import this in your code
appsettings = AppSettings()
