SYSTEM_PROMPT = (
    "You are a software architect expert in C4 modeling. Return only valid JSON."
)

C4_EXTRACTION_PROMPT = """
Analyze the requirements below and extract the architecture as a C4 model
(Level 1 System Context, Level 2 Containers, Level 3 Components).

Rules:
- Output ONLY valid JSON
- No markdown, no explanations
- Ids are short kebab-case strings, unique across the whole document
- Use "system" as the relationship endpoint for the system being designed
- Every relationship endpoint must be an id declared in this document

JSON schema:
{
  "system": {"name": "string", "description": "string", "scope": "string"},
  "people": [
    {"id": "string", "name": "string", "role": "string",
     "description": "string", "interactions": ["string"]}
  ],
  "externalSystems": [
    {"id": "string", "name": "string", "type": "string", "description": "string",
     "protocol": "string", "dataFormat": "string"}
  ],
  "level1Relationships": [
    {"from": "id|system", "to": "id|system", "label": "string", "protocol": "string"}
  ],
  "containers": [
    {"id": "string", "name": "string", "type": "string", "technology": "string",
     "description": "string", "responsibilities": ["string"], "dependencies": ["id"]}
  ],
  "level2Relationships": [
    {"from": "id", "to": "id", "label": "string", "protocol": "string", "dataFlow": "string"}
  ],
  "componentsByContainer": {
    "<containerId>": [
      {"id": "string", "name": "string", "type": "string", "technology": "string",
       "description": "string", "capabilities": ["string"]}
    ]
  },
  "level3RelationshipsByContainer": {
    "<containerId>": [
      {"from": "id", "to": "id", "label": "string", "pattern": "string"}
    ]
  }
}

Requirements:
{{TEXT}}
"""


def build_extraction_prompt(text: str, template: str = C4_EXTRACTION_PROMPT) -> str:
    return template.replace("{{TEXT}}", text)
