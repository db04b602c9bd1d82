"""
Decoding of page front matter into PageMetadata.

The front matter is YAML. Scalars keep the text the author wrote, so
`value: 0042` stays "0042" and `lamp: on` stays "on"; only `editor` is read as
a boolean. Unknown keys are ignored and missing keys take
their zero value, so pages only need to declare what they use.
"""

import logging
from typing import Any, Dict, List, Tuple, cast

import yaml

from ..errors import MetadataDecodeError
from .models import GameObject, PageMetadata

STRING_FIELDS = ("icon", "title")
OBJECT_FIELDS = ("required", "discovered")

_NULL_TAG = "tag:yaml.org,2002:null"
_MERGE_TAG = "tag:yaml.org,2002:merge"

# YAML 1.1 boolean spellings
_TRUE_VALUES = {"true", "True", "TRUE", "yes", "Yes", "YES", "on", "On", "ON"}
_FALSE_VALUES = {"false", "False", "FALSE", "no", "No", "NO", "off", "Off", "OFF"}


class TextLoader(yaml.SafeLoader):
    """SafeLoader that keeps every plain scalar except null as written.

    Numbers and booleans are not resolved, so `0042`, `on` or `No` reach the
    decoder as the text the page author typed.
    """


TextLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag in (_NULL_TAG, _MERGE_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class MetadataDecoder:
    """Decodes (and re-encodes) the YAML metadata block of a page."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def decode(self, front_matter: bytes) -> PageMetadata:
        """Decode a front matter block.

        Args:
            front_matter: Raw bytes between the delimiters

        Returns:
            Decoded PageMetadata

        Raises:
            MetadataDecodeError: If the block is not valid YAML or does not
                match the page metadata schema
        """
        try:
            data = yaml.load(front_matter, Loader=TextLoader)
        except yaml.YAMLError as e:
            raise MetadataDecodeError(f"invalid front matter: {e}", e) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise MetadataDecodeError(
                f"front matter must be a mapping, got {type(data).__name__}"
            )
        data = cast(Dict[str, Any], data)

        values: Dict[str, Any] = {}
        for key in STRING_FIELDS:
            values[key] = self._decode_string(data, key)
        values["editor"] = self._decode_bool(data, "editor")
        for key in OBJECT_FIELDS:
            values[key] = self._decode_objects(data, key)

        meta = PageMetadata(**values)
        self.logger.debug(
            f"Decoded metadata for '{meta.title}': {len(meta.required)} required, "
            f"{len(meta.discovered)} discovered"
        )
        return meta

    def encode(self, meta: PageMetadata) -> bytes:
        """Encode metadata back into a YAML front matter block."""
        text = yaml.safe_dump(
            meta.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True
        )
        return text.encode("utf-8")

    @staticmethod
    def _decode_string(data: Dict[str, Any], key: str) -> str:
        value = data.get(key)
        if isinstance(value, (dict, list)):
            raise MetadataDecodeError(f"'{key}' must be a scalar value")
        if value is None:
            return ""
        return str(value)

    @staticmethod
    def _decode_bool(data: Dict[str, Any], key: str) -> bool:
        value = data.get(key)
        if value is None:
            return False
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        raise MetadataDecodeError(f"'{key}' must be a boolean, got {value!r}")

    @staticmethod
    def _decode_objects(data: Dict[str, Any], key: str) -> Tuple[GameObject, ...]:
        value = data.get(key)
        if value is None:
            return ()
        if not isinstance(value, list):
            raise MetadataDecodeError(f"'{key}' must be a list of objects")

        objects: List[GameObject] = []
        for index, item in enumerate(cast(List[Any], value)):
            if item is None:
                item = {}
            if not isinstance(item, dict):
                raise MetadataDecodeError(
                    f"'{key}[{index}]' must be a mapping with name and value"
                )
            item = cast(Dict[str, Any], item)
            for sub_key in ("name", "value"):
                if isinstance(item.get(sub_key), (dict, list)):
                    raise MetadataDecodeError(
                        f"'{key}[{index}].{sub_key}' must be a scalar value"
                    )
            objects.append(GameObject.from_dict(item))
        return tuple(objects)


_default_decoder = MetadataDecoder()


def decode_metadata(front_matter: bytes) -> PageMetadata:
    """Decode a front matter block with the shared decoder."""
    return _default_decoder.decode(front_matter)


def encode_metadata(meta: PageMetadata) -> bytes:
    """Encode metadata with the shared decoder."""
    return _default_decoder.encode(meta)
