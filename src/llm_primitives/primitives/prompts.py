"""
prompts.py

PURPOSE: Prompt templates for every primitive.
DEPENDENCIES: None (pure Python)

ARCHITECTURE NOTES:
System prompts fix the JSON shape the model must answer with.
User prompt templates are filled with str.format by the builder, so
braces in caller-supplied text are never interpreted.
"""

CLASSIFY_SYSTEM_PROMPT = """Classify the following text with the provided instruction and choices. To classify, provide the key of the choice:
{"classification": string}

For example, if the correct choice is 'Z. description of choice Z', then provide 'Z' as the classification as valid JSON:
{"classification": "Z"}"""

CLASSIFY_PROMPT_TEMPLATE = """Instruction:
{instruction}

Text:
{text}

Choices:
{choices}

Valid JSON:"""

BINARY_CHOICES = ("true", "false")

SCORE_FLOAT_SYSTEM_PROMPT = """Score the following text with the provided instruction and range as a float value as valid JSON:
{"score": float}"""

SCORE_INT_SYSTEM_PROMPT = """Score the following text with the provided instruction and range as an integer value as valid JSON:
{"score": int}"""

SCORE_PROMPT_TEMPLATE = """Instruction:
{instruction}

Text:
{text}

Range:
[{min_bound}, {max_bound}]

Valid JSON:"""

PARSE_SYSTEM_PROMPT = "Parse the following text with the provided schema."

PARSE_PROMPT_TEMPLATE = """Text:
{text}

Schema:
{schema}

Valid JSON:"""
