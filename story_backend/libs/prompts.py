"""
Prompts sent to the vision model.
"""

SYSTEM_PROMPT = "You are a vision assistant that outputs only clean, valid JSON with no formatting or prose."

EXAMPLE_STORY = (
    '[{"summary":"Example story","description":"Details",'
    '"acceptanceCriteria":["Criteria 1","Criteria 2","Criteria 3"],'
    '"storyPoints":{"junior":3,"midLevel":2,"senior":1},"priority":"High",'
    '"assignee":"Team","labels":["tag"],"epicLink":"","components":["UI"]}]'
)


def get_story_prompt(story_count: int = 5) -> str:
    """Instruction that goes next to the image in the user message."""
    return (
        "You are a professional Project Manager who has built dozens of enterprise grade applications. "
        "You have a high attention to detail and an intuitive sense of what the business wants and needs.\n"
        f"Analyze this UI design image and generate {story_count} Jira stories for its implementation. "
        "Each story must include:\n"
        "- summary (string, short title)\n"
        "- description (string, detailed task explanation)\n"
        "- acceptanceCriteria (array of 3-5 strings, bullet points)\n"
        "- storyPoints (object with numeric junior, midLevel, senior estimates)\n"
        '- priority (string, "High", "Medium", or "Low")\n'
        '- assignee (string, e.g., "Frontend Team")\n'
        "- labels (array of strings, relevant tags)\n"
        '- epicLink (string, optional, e.g., "EPIC-123"; use "" when there is none)\n'
        '- components (array of strings, e.g., ["UI", "API"])\n'
        "Return only a clean, valid JSON array of objects, with no Markdown, backticks, code fences, "
        "prose, or additional text. Do not put double quotes inside string values. "
        "Ensure the output is parseable as JSON. Example:\n"
        f"{EXAMPLE_STORY}"
    )
