"""Canned LLM responses for testing.

Shapes follow what LM Studio and other OpenAI-compatible servers return,
so tests can replay them without a model.
"""

from __future__ import annotations

from typing import Any


def create_chat_completion_response(
    content: str | None,
    model: str = "local-model",
    prompt_tokens: int = 10,
    completion_tokens: int = 5,
    finish_reason: str = "stop",
) -> dict[str, Any]:
    """Factory for creating mock chat completion responses."""
    return {
        "id": "chatcmpl-test123",
        "object": "chat.completion",
        "created": 1705312200,
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": finish_reason,
            }
        ],
        "usage": {
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "total_tokens": prompt_tokens + completion_tokens,
        },
    }


def create_model_list_response(*model_ids: str) -> dict[str, Any]:
    """Factory for creating mock /models responses."""
    return {
        "object": "list",
        "data": [{"id": model_id, "object": "model", "owned_by": "organization_owner"} for model_id in model_ids],
    }


# A clean single-object answer
PLAIN_JSON_RECIPE = """{
  "name": "Tomato Basil Pasta",
  "ingredients": [
    {"name": "spaghetti", "quantity": "200 g"},
    {"name": "tomato", "quantity": "3"},
    {"name": "basil", "quantity": "1 handful"},
    {"name": "olive oil", "quantity": "2 tbsp"}
  ],
  "instructions": ["Boil the pasta.", "Simmer the tomatoes.", "Toss with basil."],
  "dietaryPreference": ["Vegetarian"],
  "additionalInformation": {"tips": "Save some pasta water."}
}"""

# Reasoning model output: a think block, prose and a fenced block
REASONING_FENCED_RECIPE = f"""<think>
The user has pasta, tomatoes and basil. A simple {{quick}} dish works.
</think>
Here is a recipe for you:

```json
{PLAIN_JSON_RECIPE}
```

Enjoy your meal!"""

# Trailing commas and a label before the object
LABELLED_TRAILING_COMMA_RECIPE = """Recipe: {
  "name": "Omelette",
  "ingredients": [{"name": "egg", "quantity": "3",}, {"name": "butter", "quantity": "1 tbsp",},],
  "instructions": ["Whisk.", "Cook.",],
}"""

# Refusal without any JSON
REFUSAL_RESPONSE = "I cannot help with that."

# Object without ingredients
INCOMPLETE_RECIPE = '{"name": "Mystery Stew", "instructions": ["Stir for a long time."]}'
