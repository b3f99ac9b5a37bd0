from typing import Any, Dict

LEGACY_ROOT_KEY = "level1_context"


def flatten_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Converts the nested extraction shape:
      {"level1_context": {"system", "people", "external_systems", "relationships"},
       "level2_containers", "level2_relationships",
       "level3_components", "level3_relationships"}
    → the flat shape ExtractedArchitecture validates.

    Flat payloads are returned untouched. Missing sections stay missing so
    the normalizer can still detect an incomplete answer.
    """
    context = data.get(LEGACY_ROOT_KEY)
    if not isinstance(context, dict):
        return data

    flat: Dict[str, Any] = {}
    for legacy_key, key in (
        ("system", "system"),
        ("people", "people"),
        ("external_systems", "externalSystems"),
        ("relationships", "level1Relationships"),
    ):
        if legacy_key in context:
            flat[key] = context[legacy_key]

    for legacy_key, key in (
        ("level2_containers", "containers"),
        ("level2_relationships", "level2Relationships"),
        ("level3_components", "componentsByContainer"),
        ("level3_relationships", "level3RelationshipsByContainer"),
    ):
        if legacy_key in data:
            flat[key] = data[legacy_key]

    return flat
