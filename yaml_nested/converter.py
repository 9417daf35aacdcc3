import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict

from yaml_nested.config import ConverterConfig
from yaml_nested.conversion import flatten, path_segment, unflatten
from yaml_nested.exceptions import (
    ConversionError,
    InvalidDocumentError,
    InvalidKeyError,
    UnsupportedNodeError,
)
from yaml_nested.input_handler import get_input_handler
from yaml_nested.output_handler import get_output_handler
from yaml_nested.metrics import (
    DOCUMENTS_IN,
    DOCUMENTS_OUT,
    CONVERSION_ERRORS,
    CONVERSION_DURATION,
    write_metrics,
)

logger = logging.getLogger(__name__)


def _unflatten_document(document: Any) -> Dict[str, Any]:
    """
    Unflatten a parsed flat document, e.g. ``{"a.b": 1, "a.c": 2}``.
    Keys are rendered like mapping keys, so a YAML key ``1`` addresses path "1".
    """
    if document is None:
        return {}
    if not isinstance(document, Mapping):
        raise InvalidDocumentError(
            f"A flat document must be a mapping, got {type(document).__name__}"
        )
    return unflatten((path_segment(key), value) for key, value in document.items())


# lookup table → one entry per converter mode
_CONVERSIONS: Dict[str, Callable[[Any], Dict[str, Any]]] = {
    "flatten": flatten,
    "unflatten": _unflatten_document,
}


class DocumentConverter:
    """
    Converter that reads a document, flattens or unflattens it, and writes the result.
    """

    def __init__(self, cfg: ConverterConfig):
        """
        Initialize the DocumentConverter with the provided configuration.

        Args:
            cfg (ConverterConfig): The configuration object containing input, conversion and output settings.
        """
        self.cfg = cfg
        self.convert = _CONVERSIONS[cfg.converter.mode]
        self.input_handler = get_input_handler(cfg.input)
        self.output_handler = get_output_handler(cfg.output)

    def handle_document(self, document: Any) -> Dict[str, Any]:
        """
        Convert one parsed document.

        Args:
            document (Any): The parsed document.

        Returns:
            Dict[str, Any]: The flattened or nested result.

        Raises:
            ConversionError: If the document cannot be converted.
            TypeError: If the document holds tagged nodes or invalid keys.
        """
        DOCUMENTS_IN.inc()
        with CONVERSION_DURATION.time():
            try:
                result = self.convert(document)
            except (ConversionError, InvalidKeyError, UnsupportedNodeError) as e:
                logger.error(f"Failed to {self.cfg.converter.mode} document: {e}")
                CONVERSION_ERRORS.inc()
                raise
        logger.debug("Converted document into %d top-level keys", len(result))
        return result

    def run(self) -> None:
        """
        Read the configured input, convert it and write the configured output.
        A document counts as out only once written.
        Metrics are exported afterwards when a textfile is configured, even on failure.
        """
        try:
            document = self.input_handler.read()
            result = self.handle_document(document)
            try:
                self.output_handler.write(result)
            except (TypeError, OSError) as e:
                logger.error(f"Failed to write converted document: {e}")
                CONVERSION_ERRORS.inc()
                raise
            DOCUMENTS_OUT.inc()
        finally:
            if self.cfg.metrics.textfile:
                logger.debug("Writing metrics to %s", self.cfg.metrics.textfile)
                write_metrics(self.cfg.metrics.textfile)
