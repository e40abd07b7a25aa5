"""Shape of the searchconf configuration.

Each section is a Pydantic model whose fields carry the upper-case key
used in the YAML store as their alias and the environment variable that
overrides them. Every leaf is a string; a missing value is "".
"""

from __future__ import annotations

from typing import Annotated, Any, Iterator, NamedTuple

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)
from pydantic.fields import FieldInfo


def _coerce_leaf(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple, set)):
        raise ValueError(f"expected a string, got {type(value).__name__}")
    return str(value)


Leaf = Annotated[str, BeforeValidator(_coerce_leaf)]


def leaf(alias: str, env: str, secret: bool = False) -> Any:
    """A string setting stored under ``alias`` and overridden by ``env``.

    ``secret`` settings are masked when the configuration is displayed.
    """
    return Field(default="", alias=alias, json_schema_extra={"env": env, "secret": secret})


class Section(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _empty_section(cls, value: Any, info: ValidationInfo) -> Any:
        # "GENERAL:" with nothing under it parses as null
        if value is None and section_shape(cls.model_fields[info.field_name]) is not None:
            return {}
        return value


class GeneralConfig(Section):
    similarity_measure: Leaf = leaf("SIMILARITY_MEASURE", "SIMILARITY_MEASURE")
    keep_alive: Leaf = leaf("KEEP_ALIVE", "KEEP_ALIVE")


class OpenAIConfig(Section):
    api_key: Leaf = leaf("API_KEY", "OPENAI_API_KEY", secret=True)


class GroqConfig(Section):
    api_key: Leaf = leaf("API_KEY", "GROQ_API_KEY", secret=True)


class AnthropicConfig(Section):
    api_key: Leaf = leaf("API_KEY", "ANTHROPIC_API_KEY", secret=True)


class GeminiConfig(Section):
    api_key: Leaf = leaf("API_KEY", "GEMINI_API_KEY", secret=True)


class OllamaConfig(Section):
    api_url: Leaf = leaf("API_URL", "OLLAMA_API_URL")


class CustomOpenAIConfig(Section):
    api_url: Leaf = leaf("API_URL", "CUSTOM_OPENAI_API_URL")
    api_key: Leaf = leaf("API_KEY", "CUSTOM_OPENAI_API_KEY", secret=True)
    model_name: Leaf = leaf("MODEL_NAME", "CUSTOM_OPENAI_MODEL_NAME")


class ModelsConfig(Section):
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig, alias="OPENAI")
    groq: GroqConfig = Field(default_factory=GroqConfig, alias="GROQ")
    anthropic: AnthropicConfig = Field(default_factory=AnthropicConfig, alias="ANTHROPIC")
    gemini: GeminiConfig = Field(default_factory=GeminiConfig, alias="GEMINI")
    ollama: OllamaConfig = Field(default_factory=OllamaConfig, alias="OLLAMA")
    custom_openai: CustomOpenAIConfig = Field(
        default_factory=CustomOpenAIConfig, alias="CUSTOM_OPENAI"
    )


class ApiEndpointsConfig(Section):
    searxng: Leaf = leaf("SEARXNG", "SEARXNG_API_URL")


class Config(Section):
    """Root configuration record.

    ``Config()`` is the all-empty configuration. ``model_dump(by_alias=True)``
    produces the layout written to the YAML store.
    """

    general: GeneralConfig = Field(default_factory=GeneralConfig, alias="GENERAL")
    models: ModelsConfig = Field(default_factory=ModelsConfig, alias="MODELS")
    api_endpoints: ApiEndpointsConfig = Field(
        default_factory=ApiEndpointsConfig, alias="API_ENDPOINTS"
    )


class LeafSpec(NamedTuple):
    """Location of one setting: store keys, attribute names, env var."""

    path: tuple[str, ...]
    attrs: tuple[str, ...]
    env: str
    secret: bool = False

    @property
    def dotted(self) -> str:
        return ".".join(self.path)


def section_shape(field: FieldInfo) -> type[BaseModel] | None:
    """Return the model a field nests, or None for a leaf."""
    annotation = field.annotation
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    return None


def field_for_key(shape: type[BaseModel], key: str) -> tuple[str, FieldInfo] | None:
    """Find the declared field addressed by a store key or attribute name."""
    for name, field in shape.model_fields.items():
        if key == field.alias or key == name:
            return name, field
    return None


def iter_leaves(
    shape: type[BaseModel] = Config,
    path: tuple[str, ...] = (),
    attrs: tuple[str, ...] = (),
) -> Iterator[LeafSpec]:
    """Walk the declared shape depth-first, yielding every leaf setting."""
    for name, field in shape.model_fields.items():
        key = field.alias or name
        nested = section_shape(field)
        if nested is not None:
            yield from iter_leaves(nested, path + (key,), attrs + (name,))
            continue
        extra = field.json_schema_extra
        if not isinstance(extra, dict):
            extra = {}
        env = extra.get("env", key)
        yield LeafSpec(path + (key,), attrs + (name,), str(env), bool(extra.get("secret")))


def leaf_for_path(dotted: str) -> LeafSpec:
    """Look up a leaf by dotted path, e.g. ``MODELS.OPENAI.API_KEY``.

    Segments may be store keys or attribute names.

    Raises:
        KeyError: If the path does not name a leaf setting.
    """
    shape: type[BaseModel] | None = Config
    path: list[str] = []
    segments = [s for s in dotted.split(".") if s]
    for segment in segments:
        found = field_for_key(shape, segment) if shape is not None else None
        if found is None:
            raise KeyError(f"Unknown configuration key path: {dotted}")
        name, field = found
        path.append(field.alias or name)
        shape = section_shape(field)
    if shape is not None or not segments:
        raise KeyError(f"Configuration key path is not a leaf setting: {dotted}")
    return next(spec for spec in iter_leaves() if spec.path == tuple(path))


def leaf_value(config: Config, spec: LeafSpec) -> str:
    value: Any = config
    for attr in spec.attrs:
        value = getattr(value, attr)
    return value


def empty_store_data() -> dict[str, Any]:
    """The all-empty configuration in store layout."""
    return Config().model_dump(by_alias=True)
