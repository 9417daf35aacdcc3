import os
from typing import Literal, Optional, Union

import yaml
import logging
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_PATH = os.getenv("CONFIG_PATH", "config/converter-config.yaml")


class YamlInput(BaseModel):
    """
    Configuration for reading a YAML document.
    Reads from standard input when no path is given.
    """
    type: Literal["yaml"]
    path: Optional[str] = Field(None, description="Document to read; stdin if omitted")

    def __init__(self, **data):
        logger.debug(f"Initializing YamlInput with data: {data}")
        super().__init__(**data)


class JsonInput(BaseModel):
    """
    Configuration for reading a JSON document.
    Reads from standard input when no path is given.
    """
    type: Literal["json"]
    path: Optional[str] = Field(None, description="Document to read; stdin if omitted")

    def __init__(self, **data):
        logger.debug(f"Initializing JsonInput with data: {data}")
        super().__init__(**data)


InputConfig = Union[YamlInput, JsonInput]


class ConverterSettings(BaseModel):
    """
    Configuration for the conversion itself.
    flatten turns a nested document into dot-addressed keys, unflatten reverses it.
    """
    mode: Literal["flatten", "unflatten"] = Field(..., description="Conversion direction")

    def __init__(self, **data):
        logger.debug(f"Initializing ConverterSettings with data: {data}")
        super().__init__(**data)


class YamlOutput(BaseModel):
    """
    Configuration for writing a YAML document.
    Writes to standard output when no path is given.
    """
    type: Literal["yaml"]
    path: Optional[str] = Field(None, description="Document to write; stdout if omitted")
    indent: int = Field(2, ge=2, le=9, description="Indentation of nested mappings")

    def __init__(self, **data):
        logger.debug(f"Initializing YamlOutput with data: {data}")
        super().__init__(**data)


class JsonOutput(BaseModel):
    """
    Configuration for writing a JSON document.
    Writes to standard output when no path is given.
    """
    type: Literal["json"]
    path: Optional[str] = Field(None, description="Document to write; stdout if omitted")
    indent: int = Field(4, ge=0, description="Indentation of nested objects")

    def __init__(self, **data):
        logger.debug(f"Initializing JsonOutput with data: {data}")
        super().__init__(**data)


OutputConfig = Union[YamlOutput, JsonOutput]


class MetricsConfig(BaseModel):
    """
    Configuration for exporting metrics.
    Batch runs export through the node-exporter textfile collector.
    """
    textfile: Optional[str] = Field(
        None, description="File the metrics are written to after each run (must end with .prom)"
    )

    def __init__(self, **data):
        logger.debug(f"Initializing MetricsConfig with data: {data}")
        super().__init__(**data)

    @field_validator("textfile")
    @classmethod
    def check_textfile_suffix(cls, v):
        logger.debug(f"Validating metrics textfile '{v}'")
        if v is not None and not v.endswith(".prom"):
            logger.error("`textfile` must end with .prom to be picked up by the textfile collector")
            raise ValueError("`textfile` must end with .prom")
        return v


class LoggingConfig(BaseModel):
    """
    Configuration for logging settings.
    This class defines the logging level for the application.
    """
    level: Literal["DEBUG", "INFO", "WARN", "ERROR"] = Field(
        "INFO", description="Logging level"
    )

    def __init__(self, **data):
        logger.debug(f"Initializing LoggingConfig with data: {data}")
        super().__init__(**data)


class ConverterConfig(BaseModel):
    """
    Configuration for the converter application.
    This class encapsulates all necessary settings for input, conversion, output,
    metrics and logging.
    """
    input: InputConfig
    converter: ConverterSettings
    output: OutputConfig
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "ConverterConfig":
        """
        Load and validate the converter configuration from YAML.
        Raises a clear exception if the file is missing or invalid.
        Args:
            path (Optional[str]): Configuration file; CONFIG_PATH if omitted.
        Returns:
            ConverterConfig: The validated configuration object.
        Raises:
            FileNotFoundError: If the configuration file does not exist.
            ValueError: If the configuration is invalid.
        """
        path = path or CONFIG_PATH
        logger.info(f"Loading configuration from {path}")
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
                logger.debug(f"Raw config data: {data}")
        except FileNotFoundError as e:
            logger.exception(f"Configuration file not found at {path}")
            raise FileNotFoundError(f"Configuration file not found at {path}") from e

        try:
            config = cls(**data)
            logger.info("Configuration loaded and validated successfully")
            logger.debug(f"Final config object: {config}")
            return config
        except Exception as e:
            logger.exception("Invalid configuration provided")
            raise ValueError(f"Invalid configuration: {e}") from e


def get_config(path: Optional[str] = None) -> ConverterConfig:
    """
    Retrieve the converter configuration, loading it from the specified YAML file.
    Returns:
        ConverterConfig: The validated configuration object.
    """
    logger.info("Retrieving converter configuration")
    config = ConverterConfig.load(path)
    logger.debug(f"Parsed configuration object: {config}")
    return config
