"""Request validation for the generation and cover endpoints.

Parsing happens in two passes. The pydantic models catch shape problems
(wrong types, unknown model tags, malformed URLs). Business rules then run as
an ordered list of named predicates over the parsed record; each rule yields
at most one user-facing message and every rule runs, so the caller gets the
whole list.

Prompt-only requests (``customMode=false``) are the exception: they are
checked by their own two rules and nothing else.
"""

from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from musicgate.errors import ValidationFailed
from musicgate.models.callback import CoverCallbackEnvelope
from musicgate.models.generation import (
    CoverParams,
    GenerationParams,
    WaitUploadParams,
    limits_for,
)

SIMPLE_PROMPT_LIMIT = 400
TITLE_LIMIT = 80

ParamsT = TypeVar("ParamsT", bound=BaseModel)
Rule = Callable[[Any], str | None]


def _simple_prompt_required(p: GenerationParams) -> str | None:
    if not p.prompt.strip():
        return "prompt is required when customMode=false"
    return None


def _simple_prompt_length(p: GenerationParams) -> str | None:
    if len(p.prompt) > SIMPLE_PROMPT_LIMIT:
        return f"prompt max length is {SIMPLE_PROMPT_LIMIT} when customMode=false"
    return None


def _title_required(p: GenerationParams) -> str | None:
    if not p.title.strip():
        return "title is required when customMode=true"
    return None


def _style_required(p: GenerationParams) -> str | None:
    if not p.style.strip():
        return "style is required when customMode=true"
    return None


def _lyrics_prompt_required(p: GenerationParams) -> str | None:
    if not p.instrumental and not p.prompt.strip():
        return "prompt is required when customMode=true and instrumental=false"
    return None


def _title_length(p: GenerationParams) -> str | None:
    if len(p.title) > TITLE_LIMIT:
        return f"title max length is {TITLE_LIMIT}"
    return None


def _prompt_length_for_model(p: GenerationParams) -> str | None:
    limit = limits_for(p.model).prompt
    if len(p.prompt) > limit:
        return f"prompt max length is {limit} for model {p.model}"
    return None


def _style_length_for_model(p: GenerationParams) -> str | None:
    limit = limits_for(p.model).style
    if len(p.style) > limit:
        return f"style max length is {limit} for model {p.model}"
    return None


def _upload_path_required(p: WaitUploadParams) -> str | None:
    if p.kie_upload_path is not None and not p.kie_upload_path.strip():
        return "kieUploadPath is required"
    return None


def _cover_style_and_title(p: CoverParams) -> str | None:
    if p.custom_mode and (not p.style.strip() or not p.title.strip()):
        return "style and title are required when customMode=true"
    return None


SIMPLE_RULES: list[Rule] = [_simple_prompt_required, _simple_prompt_length]

CUSTOM_RULES: list[Rule] = [
    _title_required,
    _style_required,
    _lyrics_prompt_required,
    _title_length,
    _prompt_length_for_model,
    _style_length_for_model,
]

UPLOAD_RULES: list[Rule] = [_upload_path_required]

COVER_RULES: list[Rule] = [_cover_style_and_title]


def run_rules(params: Any, rules: list[Rule]) -> list[str]:
    """Apply every rule in order and collect the messages."""
    violations = []
    for rule in rules:
        message = rule(params)
        if message is not None:
            violations.append(message)
    return violations


def _parse(model: type[ParamsT], raw: Any, message: str = "Invalid request") -> ParamsT:
    if not isinstance(raw, dict):
        raise ValidationFailed(["request body must be a JSON object"], message)
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationFailed(format_errors(e.errors()), message) from e


def format_errors(errors: Any) -> list[str]:
    """One "field: message" line per pydantic error."""
    lines = []
    for err in errors:
        field = ".".join(str(part) for part in err["loc"])
        lines.append(f"{field}: {err['msg']}" if field else err["msg"])
    return lines


def validate_generation(raw: Any, with_upload: bool = False) -> GenerationParams:
    """Parse and check a generation request.

    Raises ``ValidationFailed`` listing every broken rule.
    """
    params = _parse(WaitUploadParams if with_upload else GenerationParams, raw)

    rules = CUSTOM_RULES if params.custom_mode else SIMPLE_RULES
    violations = run_rules(params, rules)
    if with_upload:
        violations += run_rules(params, UPLOAD_RULES)

    if violations:
        raise ValidationFailed(violations)
    return params


def validate_cover(raw: Any) -> CoverParams:
    """Parse and check a cover-start request."""
    params = _parse(CoverParams, raw)
    violations = run_rules(params, COVER_RULES)
    if violations:
        raise ValidationFailed(violations)
    return params


def validate_callback(raw: Any) -> CoverCallbackEnvelope:
    """Shape check only; an envelope of any callback type is acceptable."""
    return _parse(CoverCallbackEnvelope, raw, "Invalid callback payload")
