"""Prompt templates for each study aid.

Templates are plain ``str.format`` strings; the service fills them in and
hands the result to the gateway as prompt text.
"""

from __future__ import annotations

from study_aids.domain.entities import Difficulty, QuestionMode

FLASHCARDS_PROMPT = """\
Generate {count} flashcards for the topic: "{topic}". Focus on key concepts. \
Write them in {language}.
"""

QUIZ_PROMPT = """\
Generate a quiz of {num_questions} questions in {language} for a high-school \
student on the topic: "{topic}". The difficulty level must be {difficulty}. \
The quiz must contain {contents}.
"""

TEST_PROMPT = """\
Generate a complete classroom test of {num_questions} questions in {language} \
for a high-school class on the topic: "{topic}". The difficulty level must be \
{difficulty}. The test must contain {contents}.
"""

ROUTINE_PROMPT = """\
Create a study schedule for a student.
- Start time: {start_time}
- End time: {end_time}
- Tasks to complete: {tasks}
- Pre-existing commitments: {commitments}
Plan out the study sessions for the tasks, allocating reasonable time for each. \
Include short breaks (10-15 minutes) between study blocks. \
Write the activity descriptions in {language}.
"""

LESSON_PLAN_PROMPT = """\
Create a detailed lesson plan in {language} for a high-school class on the \
topic: "{topic}". Duration: {duration} minutes. Level: {difficulty}.
"""

CONNECTIONS_PROMPT = """\
Given the topic "{topic}" (subject: "{subject}"), generate 4-5 \
interdisciplinary connections with other subjects taught in a high school. \
Write them in {language}.
"""

REGULATION_SYSTEM_INSTRUCTION = """\
You are an expert assistant on the school regulations of the institute. \
Answer in {language}, basing your answer EXCLUSIVELY on this text:

{regulation}
"""

DEFAULT_REGULATION_TEXT = (
    "L'IISS \"Pietro Verri\" è una comunità di dialogo, di ricerca, di esperienza "
    "sociale, informata ai valori democratici e volta alla crescita della persona "
    "in tutte le sue dimensioni. Il regolamento aggiornato al 10/11/2025 prevede il "
    "rispetto delle persone, delle strutture e degli orari. L'uso dei telefoni "
    "cellulari è consentito solo per finalità didattiche sotto la supervisione del "
    "docente."
)

REGULATION_FALLBACK_ANSWER = "Sorry, no answer could be found for this question."

# ── Instruction tables ──────────────────────────────────────────────────────

QUIZ_CONTENTS: dict[QuestionMode, str] = {
    QuestionMode.MULTIPLE: "only multiple-choice questions with 4 options each",
    QuestionMode.OPEN: "only open-ended questions",
    QuestionMode.MIXED: "a mix of multiple-choice questions (with 4 options) and open-ended questions",
}

TEST_CONTENTS: dict[QuestionMode, str] = {
    QuestionMode.MULTIPLE: "only multiple-choice questions with 4 options each",
    QuestionMode.OPEN: "only open-ended questions and definitions",
    QuestionMode.MIXED: (
        "a mix of multiple-choice questions (with 4 options), "
        "open-ended questions and definitions"
    ),
}

QUESTION_DIFFICULTY: dict[Difficulty, str] = {
    Difficulty.EASY: "easy",
    Difficulty.MEDIUM: "medium",
    Difficulty.HARD: "hard",
}

LESSON_DIFFICULTY: dict[Difficulty, str] = {
    Difficulty.EASY: "for beginners",
    Difficulty.MEDIUM: "intermediate",
    Difficulty.HARD: "for experts / advanced",
}
