# solhub_admin/core/code_templates.py
"""
Case-number templates configured per laboratory (``config.codeTemplate``).

Supported placeholders::

    {examCode}   code mapped from the exam type via config.codeMappings
    {type}       numeric case type
    {counter:N}  counter left-padded with zeros to N digits
    {month}      month letter, A (January) .. L (December)
    {year:2}     two-digit year since 2000
    {year:4}     four-digit year
    {day:2}      two-digit day of month
"""
import re
from datetime import date
from typing import Dict, List, Mapping, Optional, Tuple

PLACEHOLDER_RE = re.compile(r"\{[^}]+\}")
COUNTER_RE = re.compile(r"\{counter:(\d+)\}")
SIMPLE_PLACEHOLDERS = {"{examCode}", "{type}", "{month}", "{day:2}"}


def validate_template(template: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Return ``(is_valid, error_message)`` for a template"""
    if not template or not template.strip():
        return False, "Template cannot be empty"

    for placeholder in PLACEHOLDER_RE.findall(template):
        if placeholder.startswith("{counter:"):
            if not re.fullmatch(r"\d+", placeholder[9:-1]):
                return False, f"Invalid placeholder: {placeholder}. Padding must be a number."
            continue
        if placeholder.startswith("{year:"):
            if placeholder[6:-1] not in ("2", "4"):
                return False, f"Invalid placeholder: {placeholder}. Year format must be 2 or 4."
            continue
        if placeholder not in SIMPLE_PLACEHOLDERS:
            return False, f"Unknown placeholder: {placeholder}"

    return True, None


def preview(
    template: Optional[str],
    code_mappings: Optional[Mapping[str, str]] = None,
    exam_type: Optional[str] = None,
    exam_code: Optional[str] = None,
    case_type: int = 1,
    counter: int = 1,
    on: Optional[date] = None,
) -> Optional[str]:
    """Render a sample code; None when a placeholder cannot be filled"""
    if not template:
        return None

    on = on or date.today()
    code_mappings = code_mappings or {}
    result = template

    if not exam_code and exam_type:
        exam_code = code_mappings.get(exam_type)
    if exam_code:
        result = result.replace("{examCode}", exam_code)
    elif "{examCode}" in result:
        return None

    result = result.replace("{type}", str(case_type))
    result = COUNTER_RE.sub(lambda m: str(counter).zfill(int(m.group(1))), result)
    result = result.replace("{month}", chr(ord("A") + on.month - 1))
    result = result.replace("{year:2}", str(on.year - 2000))
    result = result.replace("{year:4}", str(on.year))
    result = result.replace("{day:2}", f"{on.day:02d}")

    if "{" in result:
        return None
    return result


def template_examples() -> List[Dict[str, str]]:
    return [
        {
            "name": "Conspat",
            "template": "{type}{year:2}{counter:3}{month}",
            "example": "125001K",
            "description": "type + year(2) + counter(3) + month",
        },
        {
            "name": "SPT",
            "template": "{examCode}{counter:4}{month}{year:2}",
            "example": "CI0001K25",
            "description": "exam code + counter(4) + month + year(2)",
        },
        {
            "name": "Numbers only",
            "template": "{type}{year:4}{counter:5}",
            "example": "1202500001",
            "description": "type + year(4) + counter(5)",
        },
        {
            "name": "No year",
            "template": "{examCode}{counter:6}",
            "example": "CI000001",
            "description": "exam code + counter(6)",
        },
    ]
