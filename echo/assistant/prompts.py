from typing import List, Sequence

from echo.mood.schemas import MoodEnergyEntryBase
from echo.mood.service import most_common_energy, most_common_mood, most_recent_entries
from echo.tasks.schemas import TaskBase, TaskPriority

RECENT_COMPLETED_LIMIT = 3
RECENT_ENTRIES_LIMIT = 5
SUMMARY_MIN_ENTRIES = 3

# System prompts
ASSISTANT_INTRO: str = (
    "You are Echo, an AI assistant focused on helping users manage their tasks, "
    "improve productivity, and overcome procrastination.\n"
    "Be concise, helpful, and encouraging in your responses.\n"
)

ASSISTANT_GUIDELINES: str = (
    "\nYou should:\n"
    "1. Help the user prioritize their tasks\n"
    "2. Provide specific, actionable advice\n"
    "3. Offer encouragement and motivation\n"
    "4. Suggest techniques to overcome procrastination when relevant\n"
)

REFLECTION_PROMPT: str = (
    "Based on the user's mood and energy tracking data, provide a thoughtful reflection that:\n"
    "1. Acknowledges their current emotional and energy state\n"
    "2. Identifies potential patterns or insights\n"
    "3. Offers personalized suggestions for maintaining or improving their wellbeing\n"
    "4. Connects their state to their productivity and task management\n"
    "\n"
    "Keep your response concise (3-5 sentences) but insightful and empathetic.\n"
)

REFLECTION_USER_MESSAGE: str = "Please provide a reflection on my mood and energy data."

# Fallback messages shown in place of a vendor answer
CHAT_EMPTY_MESSAGE: str = (
    "I'm sorry, but I couldn't generate a response at this time. "
    "This might be due to a temporary issue with the {vendor} AI service. "
    "Please try again in a few moments."
)
CHAT_FAILED_MESSAGE: str = (
    "I'm sorry, but I encountered an error while communicating with the {vendor} AI service. "
    "This might be due to an invalid API key or network issues. "
    "Please check your API key and internet connection, then try again."
)
REFLECTION_EMPTY_MESSAGE: str = "I couldn't generate a reflection at this time. Please try again later."
REFLECTION_FAILED_MESSAGE: str = (
    "I encountered an error while trying to generate a reflection. "
    "Please check your internet connection and try again."
)
REFLECTION_NO_DATA_MESSAGE: str = (
    "I don't have any mood or energy data to analyze yet. "
    "Try tracking your mood and energy levels regularly to get personalized insights."
)

# Greetings
GREETING_NO_TASKS: str = (
    "Hello! I'm Echo (powered by {vendor}), your AI assistant. I'm here to help you manage "
    "your tasks and boost your productivity. How can I assist you today?"
)
GREETING_HIGH_PRIORITY: str = (
    "Hello! I'm Echo (powered by {vendor}), your AI assistant. I notice you have {count} tasks "
    "in progress, including {high_count} high-priority tasks like \"{title}\". "
    "How can I help you make progress today?"
)
GREETING_TASKS: str = (
    "Hello! I'm Echo (powered by {vendor}), your AI assistant. I see you have {count} tasks "
    "in progress. How can I help you prioritize and complete them today?"
)


def build_system_prompt(tasks: Sequence[TaskBase]) -> str:
    """Describes the user's open work and a few recent wins to the model."""
    incomplete = [t for t in tasks if not t.is_completed]
    completed = [t for t in tasks if t.is_completed]

    lines: List[str] = [ASSISTANT_INTRO]
    if tasks:
        lines.append("\nHere is the current context about the user's tasks:\n")
        if incomplete:
            lines.append("\nIncomplete tasks:\n")
            for task in incomplete:
                lines.append(f"- {task.title} (Priority: {task.priority.value}): {task.description}\n")
        if completed:
            lines.append("\nRecently completed tasks:\n")
            for task in completed[:RECENT_COMPLETED_LIMIT]:
                lines.append(f"- {task.title}\n")
    lines.append(ASSISTANT_GUIDELINES)
    return "".join(lines)


def build_greeting(tasks: Sequence[TaskBase], vendor: str) -> str:
    incomplete = [t for t in tasks if not t.is_completed]
    if not incomplete:
        return GREETING_NO_TASKS.format(vendor=vendor)

    high_priority = [t for t in incomplete if t.priority == TaskPriority.HIGH]
    if high_priority:
        return GREETING_HIGH_PRIORITY.format(
            vendor=vendor,
            count=len(incomplete),
            high_count=len(high_priority),
            title=high_priority[0].title,
        )
    return GREETING_TASKS.format(vendor=vendor, count=len(incomplete))


def build_reflection_prompt(entries: Sequence[MoodEnergyEntryBase]) -> str:
    lines: List[str] = [REFLECTION_PROMPT, "\nHere is the user's mood and energy tracking data:\n"]

    for index, entry in enumerate(most_recent_entries(entries, RECENT_ENTRIES_LIMIT), start=1):
        lines.append(f"\nEntry {index}:\n")
        lines.append(f"- Date: {entry.date.isoformat()}\n")
        lines.append(f"- Time: {entry.time.strftime('%H:%M')}\n")
        lines.append(f"- Mood: {entry.mood_level.label} ({entry.mood_level.icon})\n")
        lines.append(f"- Energy: {entry.energy_level.label} ({entry.energy_level.icon})\n")
        if entry.note.strip():
            lines.append(f"- Note: {entry.note}\n")

    if len(entries) >= SUMMARY_MIN_ENTRIES:
        lines.append("\nSummary:\n")
        mood = most_common_mood(entries)
        if mood is not None:
            lines.append(f"- Most common mood: {mood.label} ({mood.icon})\n")
        energy = most_common_energy(entries)
        if energy is not None:
            lines.append(f"- Most common energy level: {energy.label} ({energy.icon})\n")

    return "".join(lines)
