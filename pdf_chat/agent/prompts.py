"""Prompt templates that embed a bounded prefix of the document text.

Truncation is a hard cut at a character count, not token- or sentence-aware.
"""

from dataclasses import dataclass

from pdf_chat.agent.config import ANALYSIS_CHAR_LIMIT, QUESTION_CHAR_LIMIT

ANALYSIS_TRUNCATION_NOTICE = "\n\n[Content truncated for analysis...]"
QUESTION_TRUNCATION_NOTICE = "\n[Content continues...]"

ANALYSIS_TEMPLATE = """I have uploaded a PDF document titled "{title}". Please analyze the following text content and provide:

1. **📋 Document Summary**: A comprehensive overview of the main topics and themes
2. **🔑 Key Points**: The most important information, findings, or arguments
3. **📊 Document Structure**: How the content is organized
4. **❓ Potential Questions**: Suggest 4-5 interesting questions I could ask about this document

Here is the extracted text from the PDF:

---
{context}
---

Please provide a detailed analysis in a well-formatted response using markdown. Be thorough and insightful."""

QUESTION_TEMPLATE = """Based on the PDF document "{title}" that I uploaded, please answer the following question. Use the document content as your primary source of information.

PDF Content Context:
{context}

User Question: {question}

Please provide a detailed, accurate answer based on the PDF content. If the question cannot be answered from the document, please say so explicitly and offer to help with related topics that are covered in the document. Format your response using markdown for better readability."""


@dataclass(frozen=True)
class PromptContext:
    """Inputs for one prompt, built per call."""

    document_text: str
    character_budget: int
    user_question: str | None = None

    def bounded_text(self, notice: str) -> str:
        """Return the text prefix that fits the budget, plus ``notice`` if cut."""
        excerpt = self.document_text[: self.character_budget]
        if len(self.document_text) > self.character_budget:
            excerpt += notice
        return excerpt


def build_analysis_prompt(
    document_text: str,
    title: str,
    char_limit: int = ANALYSIS_CHAR_LIMIT,
) -> str:
    """Build the prompt requesting a structured summary of the document."""
    context = PromptContext(document_text, char_limit)
    return ANALYSIS_TEMPLATE.format(
        title=title,
        context=context.bounded_text(ANALYSIS_TRUNCATION_NOTICE),
    )


def build_question_prompt(
    document_text: str,
    title: str,
    question: str,
    char_limit: int = QUESTION_CHAR_LIMIT,
) -> str:
    """Build the prompt answering ``question`` from the document context.

    The question is embedded verbatim.
    """
    context = PromptContext(document_text, char_limit, question)
    return QUESTION_TEMPLATE.format(
        title=title,
        context=context.bounded_text(QUESTION_TRUNCATION_NOTICE),
        question=context.user_question,
    )
