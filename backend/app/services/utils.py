"""Utilidades compartidas entre servicios."""

import json
import re


def parse_json_response(response: str) -> dict | None:
    """Parsea respuesta JSON del LLM, manejando bloques ``` y texto extra."""
    clean = response.strip()
    if clean.startswith("```"):
        clean = re.sub(r"```(?:json)?\n?", "", clean)
        clean = clean.rstrip("`").strip()
    try:
        data = json.loads(clean)
    except json.JSONDecodeError:
        # Algunos modelos anteponen texto al objeto JSON
        match = re.search(r"\{.*\}", clean, re.DOTALL)
        if not match:
            return None
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError:
            return None
    return data if isinstance(data, dict) else None
