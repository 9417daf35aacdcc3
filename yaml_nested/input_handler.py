"""
Description:
Input handler classes for reading YAML and JSON documents.

Defines abstract and concrete handlers that turn a file (or stdin) into the
plain Python values the conversions work on.
"""

import json
import logging
import sys
from abc import ABC, abstractmethod
from typing import Any, Type, TextIO, Union

import yaml

from yaml_nested.config import JsonInput, YamlInput
from yaml_nested.values import Tagged

logger = logging.getLogger(__name__)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class DocumentLoader(yaml.SafeLoader):
    """
    Safe loader producing only null, bool, number, string, list and dict values.
    Timestamps stay strings and local tags (``!name``) load as Tagged values.
    """


DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _construct_tagged(loader: DocumentLoader, tag_suffix: str, node: yaml.Node) -> Tagged:
    if isinstance(node, yaml.ScalarNode):
        value = loader.construct_scalar(node)
    elif isinstance(node, yaml.SequenceNode):
        value = loader.construct_sequence(node, deep=True)
    else:
        value = loader.construct_mapping(node, deep=True)
    return Tagged(tag="!" + tag_suffix, value=value)


DocumentLoader.add_multi_constructor("!", _construct_tagged)


class BaseInputHandler(ABC):
    """
    Abstract base class for input handlers.
    Defines the interface for loading a document from a text stream.
    """

    def __init__(self, cfg):
        """
        Initialize the input handler with configuration.

        Args:
            cfg: Configuration object for the input document.
        """
        self.cfg = cfg
        logger.debug("BaseInputHandler initialized with config: %s", cfg)

    def read(self) -> Any:
        """
        Read the configured document, from its path or from stdin.

        Returns:
            Any: The parsed document.

        Raises:
            FileNotFoundError: If the configured path does not exist.
        """
        if self.cfg.path is None:
            logger.debug("Reading document from stdin")
            return self.load(sys.stdin)

        logger.debug("Reading document from %s", self.cfg.path)
        try:
            with open(self.cfg.path, "r", encoding="utf-8") as f:
                document = self.load(f)
        except FileNotFoundError:
            logger.error("Input document not found: %s", self.cfg.path)
            raise
        logger.info("Read document from %s", self.cfg.path)
        return document

    @abstractmethod
    def load(self, stream: TextIO) -> Any:
        """
        Parse one document from *stream*.

        Args:
            stream (TextIO): Text stream positioned at the start of the document.
        """
        raise NotImplementedError


class YamlInputHandler(BaseInputHandler):
    """
    Input handler for YAML documents.
    """

    def load(self, stream: TextIO) -> Any:
        """
        Parse a YAML document with DocumentLoader.

        Raises:
            yaml.YAMLError: If the stream is not valid YAML.
        """
        try:
            return yaml.load(stream, Loader=DocumentLoader)
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML document: %s", e)
            raise


class JsonInputHandler(BaseInputHandler):
    """
    Input handler for JSON documents.
    """

    def load(self, stream: TextIO) -> Any:
        """
        Parse a JSON document.

        Raises:
            json.JSONDecodeError: If the stream is not valid JSON.
        """
        try:
            return json.load(stream)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse JSON document: %s", e)
            raise


_input_handlers_map: dict[Type, Type[BaseInputHandler]] = {
    YamlInput: YamlInputHandler,
    JsonInput: JsonInputHandler,
}


def get_input_handler(input_cfg: Union[YamlInput, JsonInput]) -> BaseInputHandler:
    """
    Factory function to get the appropriate input handler based on the configuration type.

    Args:
        input_cfg (Union[YamlInput, JsonInput]): The input configuration object.

    Returns:
        BaseInputHandler: The appropriate input handler instance.

    Raises:
        ValueError: If the input type is unsupported.
    """
    logger.debug("Getting input handler for configuration: %s", type(input_cfg).__name__)
    handler_cls = _input_handlers_map.get(type(input_cfg))
    if not handler_cls:
        logger.error("Unsupported input type: %s", type(input_cfg).__name__)
        raise ValueError(f"Unsupported input type: {type(input_cfg)}")
    logger.info("Input handler %s selected", handler_cls.__name__)
    return handler_cls(input_cfg)
