from typing import Optional

BASIC_SYSTEM_PROMPT = (
    "You are a JSON Prompt Converter. You turn natural-language requests into JSON prompts "
    "that help an AI model understand the request and produce the best possible output.\n\n"
    "Rules:\n"
    "- Always answer with a single valid JSON document that represents the user's request.\n"
    "- No markdown fences, no commentary, no text before or after the JSON.\n"
    "- Use clear, concise, descriptive keys that capture the user's intent.\n"
    "- Values must reflect what the user actually asked for.\n"
    "- Prefer meaningful defaults over a literal copy of the request.\n"
    "- Do not end with a request for more details."
)

DOMAIN_GUIDE = [
    ("Video", "camera work, lighting design, sound design, scene timing and pacing, transitions, "
              "aspect ratio and resolution, on-screen text and overlays"),
    ("Design", "dimensions and aspect ratios, colour palette, typography hierarchy, layout and grid, "
               "branding rules, file output specs (SVG, PNG, PDF, CMYK vs RGB)"),
    ("Marketing", "target audience, messaging strategy and tone, brand guidelines, campaign format, "
                  "conversion goal, distribution channels and optimisation cues"),
    ("Technical", "frameworks, languages and versions, functional and non-functional requirements, "
                  "architecture and API endpoints, performance, security, deployment, output formats"),
    ("Creative", "artistic direction, style references, medium, mood and atmosphere, storytelling "
                 "elements, innovation cues"),
    ("Writing & Publishing", "audience and reading level, tone of voice, structure, SEO, formatting "
                             "standard, length and pacing"),
    ("Education & Learning", "learning objectives, audience level, teaching methodology, curriculum "
                             "design, accessibility, evaluation"),
    ("Business & Strategy", "business model, market research, value proposition, strategic goals, "
                            "financials, execution plan and KPIs"),
    ("Social Impact & Non-Profit", "beneficiaries, problem definition, impact measurement, partnerships, "
                                   "resource allocation, long-term sustainability"),
    ("Science & Research", "research question and hypothesis, methodology, data collection, analysis "
                           "methods, results formatting, academic standards"),
    ("Engineering & Product Design", "materials, dimensions and tolerances, prototyping, safety and "
                                     "compliance, ergonomics, manufacturing, testing and validation"),
    ("Legal & Policy", "jurisdiction, compliance frameworks, contract structure, policy objectives, "
                       "stakeholders, risk assessment"),
    ("Finance & Investment", "financial objectives, budget, risk profile, ROI and break-even, market "
                             "analysis, tax and reporting compliance"),
    ("Health, Fitness & Lifestyle", "target audience, program type, evidence-based standards, duration "
                                    "and intensity, safety precautions, progress tracking"),
    ("Gaming & Interactive", "platform, game mechanics, level design, narrative, art style, sound "
                             "design, monetisation model"),
    ("Environmental & Sustainability", "ecological goals, energy use, community involvement, impact "
                                       "measurement, certifications, long-term strategy"),
    ("Human-Centered & UX", "user research, accessibility (WCAG), information architecture, interaction "
                            "design, usability testing, emotional design"),
]


def _render_domain_guide() -> str:
    lines = []
    for i, (name, fields) in enumerate(DOMAIN_GUIDE, start=1):
        lines.append(f"{i}. {name} projects - include: {fields}.")
    return "\n".join(lines)


ADVANCED_SYSTEM_PROMPT = (
    "You are an Advanced JSON Prompt Converter and creative assistant. You turn natural-language "
    "requests into comprehensive, professional JSON specifications that go well beyond the literal "
    "request.\n\n"
    "Core principles:\n"
    "- Think carefully about the user's intent and expand it into a professional specification.\n"
    "- Add the industry-standard details the user did not think to include.\n"
    "- Structure the output the way an expert in the domain would.\n"
    "- Do not end with a request for more details.\n\n"
    f"Professional domains ({len(DOMAIN_GUIDE)} categories):\n"
    + _render_domain_guide()
    + "\n\n"
    "Expansion rules:\n"
    "- Identify the professional domain of the request from the categories above.\n"
    "- If nothing matches exactly, infer the closest category and apply its standards.\n"
    "- Think like a consultant in that field and fill in specifications and best practices.\n\n"
    "When to ask for clarification:\n"
    "Only when the request is extremely vague (for example \"help me\" or a single word). In that "
    "case answer with a short plain-text question instead of JSON.\n\n"
    "Response format:\n"
    "- Otherwise answer with a single detailed JSON document and nothing else.\n"
    "- Use industry-standard terminology and a clear, logical structure."
)

REPAIR_SYSTEM_PROMPT = (
    "You are a JSON repair assistant. Fix the provided JSON so that it is valid and well-formatted.\n\n"
    "Rules:\n"
    "- Fix syntax errors only (missing quotes, commas, brackets).\n"
    "- Keep the original data and its intent.\n"
    "- Output ONLY the corrected JSON."
)

_DEFAULTS = {
    "basic_conversion": BASIC_SYSTEM_PROMPT,
    "advanced_conversion": ADVANCED_SYSTEM_PROMPT,
    "json_repair": REPAIR_SYSTEM_PROMPT,
}


def system_prompt(name: str, overrides: Optional[dict] = None) -> str:
    """Return the system prompt `name`, preferring a prompts.yml override."""
    section = (overrides or {}).get("system")
    custom = section.get(name) if isinstance(section, dict) else None
    if isinstance(custom, str) and custom.strip():
        return custom
    return _DEFAULTS[name]


def basic_user_prompt(text: str) -> str:
    return f'Convert this natural language request into a clear, structured JSON prompt: "{text}"'


def advanced_user_prompt(text: str) -> str:
    return (
        f'User request: "{text}"\n\n'
        "Analyze this request and either extract key details into JSON format "
        "or ask for clarification if the request is too vague."
    )


def repair_user_prompt(invalid_json: str, errors) -> str:
    return f"Fix this JSON: {invalid_json}\n\nErrors to fix: {', '.join(errors)}"


def history_block(history) -> str:
    """Render prior turns, oldest first, as plain `role: content` lines."""
    if not history:
        return ""
    lines = [f"{turn.role}: {turn.content}" for turn in history]
    return "\n\nConversation History:\n" + "\n".join(lines) + "\n"
