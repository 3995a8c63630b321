"""Classifying policy e-mails and summarising policies with the model API."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Mapping, Optional, TypeVar

import requests

from fineprint.jsonschema import JSONSchema, JSONSchemaType

log = logging.getLogger(__name__)

# How many bytes of input are sent, to keep within the context window and costs.
INPUT_BYTE_LIMIT = 150000

_API_URL = "https://api.anthropic.com/v1/messages"
_API_VERSION = "2023-06-01"
_SUMMARY_MODEL = "claude-sonnet-4-20250514"
_CLASSIFY_MODEL = "claude-3-5-haiku-20241022"
_CLASSIFICATIONS = ["good", "neutral", "bad", "blocker"]

T = TypeVar("T")


class ClaudeError(Exception):
    """Raised when a request cannot be made or its answer is unusable."""


@dataclass(frozen=True)
class Message:
    """One message of a conversation."""

    role: str
    content: str


@dataclass(frozen=True)
class Tool:
    """A tool the model may call, with the schema of its input."""

    name: str
    description: str
    input_schema: JSONSchema


@dataclass(frozen=True)
class ToolChoice:
    """Forces the model to use a particular tool."""

    type: str
    name: str


@dataclass
class Request:
    """A request to the messages endpoint."""

    model: str
    messages: list[Message] = field(default_factory=list)
    tools: list[Tool] = field(default_factory=list)
    max_tokens: int = 0
    tool_choice: Optional[ToolChoice] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON payload."""
        out: dict[str, Any] = {"model": self.model}
        if self.max_tokens:
            out["max_tokens"] = self.max_tokens
        out["messages"] = [asdict(m) for m in self.messages]
        out["tools"] = [
            {
                "name": t.name,
                "description": t.description,
                "input_schema": t.input_schema.to_dict(),
            }
            for t in self.tools
        ]
        if self.tool_choice is not None:
            out["tool_choice"] = asdict(self.tool_choice)
        return out


@dataclass
class PolicyClassification:
    """Whether an e-mail announces a policy change, and which one."""

    is_policy_change: bool = False
    policy_type: str = ""
    company: str = ""
    confidence: str = ""
    policy_url: str = ""
    trimmed: bool = False


@dataclass(frozen=True)
class PolicyHighlight:
    """One point about a policy, with how it affects users."""

    description: str = ""
    classification: str = ""


@dataclass
class PolicySummary:
    """Highlights of a policy document."""

    highlights: list[PolicyHighlight] = field(default_factory=list)
    trimmed: bool = False


@dataclass(frozen=True)
class DiffHighlight:
    """One change between policy versions, with how it affects users."""

    description: str = ""
    classification: str = ""


@dataclass
class DiffSummary:
    """Highlights of the changes between two policy versions."""

    highlights: list[DiffHighlight] = field(default_factory=list)
    trimmed: bool = False


def _value(data: Mapping[str, Any], key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


def _trim(text: str, what: str) -> tuple[str, bool]:
    encoded = text.encode("utf-8")
    if len(encoded) <= INPUT_BYTE_LIMIT:
        return text, False
    log.info("Trimming %s, which is %d bytes long", what, len(encoded))
    return encoded[:INPUT_BYTE_LIMIT].decode("utf-8", errors="ignore"), True


def _highlights_tool(
    description: str, item_description: str, text_description: str, class_description: str
) -> Tool:
    return Tool(
        name="extract_highlights",
        description=description,
        input_schema=JSONSchema(
            type=JSONSchemaType.OBJECT,
            properties={
                "highlights": JSONSchema(
                    type=JSONSchemaType.ARRAY,
                    items=JSONSchema(
                        type=JSONSchemaType.OBJECT,
                        description=item_description,
                        properties={
                            "description": JSONSchema(
                                type=JSONSchemaType.STRING,
                                description=text_description,
                            ),
                            "classification": JSONSchema(
                                type=JSONSchemaType.STRING,
                                description=class_description,
                                enum=list(_CLASSIFICATIONS),
                            ),
                        },
                    ),
                ),
            },
        ),
    )


def _issue_request(
    api_key: str, request: Request, parse: Callable[[Mapping[str, Any]], T]
) -> T:
    try:
        resp = requests.post(
            _API_URL,
            data=json.dumps(request.to_dict()),
            headers={
                "Content-Type": "application/json",
                "x-api-key": api_key,
                "anthropic-version": _API_VERSION,
            },
        )
    except requests.RequestException as exc:
        raise ClaudeError(f"error making request: {exc}") from exc

    if resp.status_code != 200:
        raise ClaudeError(f"claude API returned status: {resp.status_code}")

    try:
        data = resp.json()
    except ValueError as exc:
        raise ClaudeError(f"error decoding Claude response: {exc}") from exc
    if not isinstance(data, dict):
        raise ClaudeError("error decoding Claude response: expected an object")

    content = data.get("content") or []
    if not content:
        raise ClaudeError("empty response from Claude")
    first = content[0]
    tool_input = first.get("input") if isinstance(first, dict) else None
    if not isinstance(tool_input, dict):
        raise ClaudeError("error parsing JSON: tool input is not an object")
    return parse(tool_input)


def _parse_highlights(data: Mapping[str, Any], kind: type) -> list:
    return [
        kind(
            description=_value(h, "description", ""),
            classification=_value(h, "classification", ""),
        )
        for h in _value(data, "highlights", [])
    ]


def generate_summary_report(
    api_key: str, pc: PolicyClassification, text_body: str
) -> PolicySummary:
    """Summarise the points of a policy document that matter to users."""
    text_body, trimmed = _trim(text_body, "text body for summary")

    prompt = (
        "Analyze the text of the provided company document and highlight the details "
        "that are important to an end-user as a series of points, here are some examples "
        "from the ToS;DR service describing PayPal's various user agreements:\n"
        "\n"
        "<examples>\n"
        '- "This service allows you to retrieve an archive of your data"\n'
        '- "This service ignores the Do Not Track (DNT) header and tracks users anyway '
        'even if they set this header."\n'
        '- "The service may use tracking pixels, web beacons, browser fingerprinting, '
        'and/or device fingerprinting on users."\n'
        '- "The service may change its terms at any time, but the user will receive '
        'notification of the changes."\n'
        '- "This service requires first-party cookies"\n'
        "- \"This service holds onto content that you've deleted\"\n"
        '- "The service informs users that its privacy policy does not apply to third '
        'party websites"\n'
        '- "Third parties used by the service are bound by confidentiality obligations"\n'
        '- "You can limit how your information is used by third-parties and the service"\n'
        '- "This service may use your personal information for marketing purposes"\n'
        '- "The service uses social media cookies/pixels"\n'
        '- "Blocking first party cookies may limit your ability to use the service"\n'
        "</examples>\n"
        "\n"
        f"<company>{pc.company}</company>\n"
        "\n"
        f"<policy_url>{pc.policy_url}</policy_url>\n"
        "\n"
        f"<policy_type>{pc.policy_type}</policy_type>\n"
        "\n"
        "<document_to_analyze>\n"
        f"{text_body}\n"
        "</document_to_analyze>\n"
    )

    request = Request(
        model=_SUMMARY_MODEL,
        max_tokens=10000,
        tools=[
            _highlights_tool(
                "Analyze the text of a company's user-facing legal documents and extract "
                "relevant details that will be important to users",
                "An individual highlight to show to a user, ex '[neutral] The service "
                "collects many different types of personal data'",
                "A description of the highlight, ex 'The service collects many different "
                "types of personal data'",
                "How this policy decision affects users.",
            )
        ],
        tool_choice=ToolChoice(type="tool", name="extract_highlights"),
        messages=[Message(role="user", content=prompt)],
    )
    summary = _issue_request(
        api_key,
        request,
        lambda data: PolicySummary(highlights=_parse_highlights(data, PolicyHighlight)),
    )
    summary.trimmed = trimmed
    return summary


def generate_diff_report(
    api_key: str, pc: PolicyClassification, unified_diff: str
) -> DiffSummary:
    """Explain the changes in a unified diff of two policy versions."""
    unified_diff, trimmed = _trim(unified_diff, "unified diff")

    prompt = (
        "Analyze the unified diff of previous and current versions of the company "
        "document and explain the changes as a series of points. Some guidelines:\n"
        "\n"
        "- Focus on changes that are important to an end-user, e.g. changes to data "
        "collection and tracking\n"
        "- Don't mention things that aren't changing, where the policy is the "
        "functionally the same, even if the wording is different\n"
        "- DO NOT mention any diffs that involve links changing from Web Archive to the "
        "company's site\n"
        "\t- That's an artifact of our analysis pipeline and SHOULD NOT be mentioned to "
        "the user.\n"
        "- Write in a clear and accessible way, avoiding legal jargon\n"
        "- If it makes sense to reference a section when talking about a change, "
        "reference it at the end\n"
        "\n"
        f"<company>{pc.company}</company>\n"
        "\n"
        f"<policy_url>{pc.policy_url}</policy_url>\n"
        "\n"
        f"<policy_type>{pc.policy_type}</policy_type>\n"
        "\n"
        "<diff_to_analyze>\n"
        f"{unified_diff}\n"
        "</diff_to_analyze>\n"
    )

    request = Request(
        model=_SUMMARY_MODEL,
        max_tokens=10000,
        tools=[
            _highlights_tool(
                "Analyze the unified diff between two versions of a company's user-facing "
                "legal documents and extract highlights that will be important to users",
                "An individual change to show to a user, ex '[good] The service no longer "
                "requires registration to use'",
                "A description of the highlight, ex 'The service is now available via Tor'",
                "How this change in policy affects users.",
            )
        ],
        tool_choice=ToolChoice(type="tool", name="extract_highlights"),
        messages=[Message(role="user", content=prompt)],
    )
    summary = _issue_request(
        api_key,
        request,
        lambda data: DiffSummary(highlights=_parse_highlights(data, DiffHighlight)),
    )
    summary.trimmed = trimmed
    return summary


def _parse_classification(data: Mapping[str, Any]) -> PolicyClassification:
    return PolicyClassification(
        is_policy_change=bool(_value(data, "is_policy_change", False)),
        policy_type=_value(data, "policy_type", ""),
        company=_value(data, "company", ""),
        confidence=_value(data, "confidence", ""),
        policy_url=_value(data, "policy_url", ""),
    )


def classify_policy_change(
    api_key: str, subject: str, text_body: str, html_body: str
) -> PolicyClassification:
    """Decide whether an e-mail announces a change to a company's policies."""
    if not api_key:
        raise ClaudeError("ANTHROPIC_API_KEY not provided")

    text_body, html_body = text_body.strip(), html_body.strip()
    if not text_body and not html_body:
        raise ClaudeError("no email content provided")

    parts = []
    if text_body:
        parts.append(f"<text_body>{text_body}</text_body>")
    if html_body:
        parts.append(f"<html_body>{html_body}</html_body>")
    content, trimmed = _trim("".join(parts), "email content")

    prompt = (
        "Analyze this email to determine if it's a company notifying about policy "
        "changes (Terms of Service, Privacy Policy, User Agreement, etc.).\n"
        "\n"
        f"<subject>{subject}</subject>\n"
        "\n"
        f"{content}"
    )

    request = Request(
        model=_CLASSIFY_MODEL,
        max_tokens=600,
        tools=[
            Tool(
                name="classify_email",
                description="Analyze the body of a given email to determine if it's a "
                "company notifying about a policy or legal agreement change",
                input_schema=JSONSchema(
                    type=JSONSchemaType.OBJECT,
                    properties={
                        "is_policy_change": JSONSchema(
                            type=JSONSchemaType.BOOLEAN,
                            description="True if this is indeed a company notifying "
                            "about some policy or legal agreement change",
                        ),
                        "policy_type": JSONSchema(
                            type=JSONSchemaType.STRING,
                            description="The high-level type of the policy that has "
                            "been updated",
                            enum=[
                                "terms_of_service",
                                "privacy_policy",
                                "user_agreement",
                                "other",
                                "",
                            ],
                        ),
                        "company": JSONSchema(
                            type=JSONSchemaType.STRING,
                            description="The name of the company who's policy has changed",
                        ),
                        "confidence": JSONSchema(
                            type=JSONSchemaType.STRING,
                            description="Level of confidence that this email does "
                            "indeed indicate that some agreement/policy is changing",
                            enum=["high", "medium", "low"],
                        ),
                        "policy_url": JSONSchema(
                            type=JSONSchemaType.STRING,
                            description="Valid HTTP(S) URL where the policy can be "
                            "accessed, leave blank if none is found in the email",
                        ),
                    },
                    required=[
                        "is_policy_change",
                        "policy_type",
                        "company",
                        "confidence",
                        "policy_url",
                    ],
                ),
            )
        ],
        tool_choice=ToolChoice(type="tool", name="classify_email"),
        messages=[Message(role="user", content=prompt)],
    )
    classification = _issue_request(api_key, request, _parse_classification)
    classification.trimmed = trimmed
    return classification