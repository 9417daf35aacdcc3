import json
import logging
import sys
from abc import ABC, abstractmethod
from typing import Any, Dict, Type, Union

import yaml

from yaml_nested.config import JsonOutput, YamlOutput
from yaml_nested.values import Tagged

logger = logging.getLogger(__name__)


class DocumentDumper(yaml.SafeDumper):
    """Safe dumper that writes Tagged values back with their tag."""


def _represent_tagged(dumper: DocumentDumper, data: Tagged) -> yaml.Node:
    node = dumper.represent_data(data.value)
    node.tag = data.tag
    return node


DocumentDumper.add_representer(Tagged, _represent_tagged)


class BaseOutputHandler(ABC):
    """
    Abstract base class for output handlers.
    Defines the interface for serializing a document and writing it out.
    """

    def __init__(self, cfg):
        """
        Initialize the output handler with configuration.

        Args:
            cfg: Configuration object for the output document.
        """
        self.cfg = cfg
        logger.debug("OutputHandler initialized with config: %s", cfg)

    def write(self, document: Any) -> None:
        """
        Serialize *document* and write it to the configured path, or stdout.

        Args:
            document (Any): The document to write.
        """
        body = self.dump(document)
        if self.cfg.path is None:
            logger.debug("Writing document to stdout")
            sys.stdout.write(body)
            sys.stdout.flush()
            return

        logger.debug("Writing document to %s", self.cfg.path)
        try:
            with open(self.cfg.path, "w", encoding="utf-8") as f:
                f.write(body)
        except OSError as e:
            logger.error("Failed to write document to %s: %s", self.cfg.path, e)
            raise
        logger.info("Document written to %s", self.cfg.path)

    @abstractmethod
    def dump(self, document: Any) -> str:
        """
        Serialize a document to text.

        Args:
            document (Any): The document to serialize.
        """
        raise NotImplementedError


class YamlOutputHandler(BaseOutputHandler):
    """
    Output handler for YAML.
    Keys are written in the order the document holds them.
    """

    def dump(self, document: Any) -> str:
        return yaml.dump(
            document,
            Dumper=DocumentDumper,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
            indent=self.cfg.indent,
        )


class JsonOutputHandler(BaseOutputHandler):
    """
    Output handler for JSON.
    """

    def dump(self, document: Any) -> str:
        """
        Raises:
            TypeError: If the document holds values JSON cannot express (e.g. Tagged).
        """
        try:
            return json.dumps(document, indent=self.cfg.indent, ensure_ascii=False) + "\n"
        except TypeError as e:
            logger.error("Document cannot be written as JSON: %s", e)
            raise


_output_handlers_map: Dict[Type, Type[BaseOutputHandler]] = {
    YamlOutput: YamlOutputHandler,
    JsonOutput: JsonOutputHandler,
}


def get_output_handler(output_cfg: Union[YamlOutput, JsonOutput]) -> BaseOutputHandler:
    """
    Factory function to get the appropriate output handler based on the configuration type.

    Args:
        output_cfg (Union[YamlOutput, JsonOutput]): The output configuration object.

    Returns:
        BaseOutputHandler: The appropriate output handler instance.

    Raises:
        ValueError: If the output type is unsupported.
    """
    logger.debug("Getting output handler for configuration: %s", type(output_cfg).__name__)
    handler_cls = _output_handlers_map.get(type(output_cfg))
    if not handler_cls:
        logger.error("Unsupported output type: %s", type(output_cfg).__name__)
        raise ValueError(f"Unsupported output type: {type(output_cfg)}")
    logger.info("Output handler %s selected", handler_cls.__name__)
    return handler_cls(output_cfg)
