from openai import AsyncOpenAI
from typing import List
from src.config.settings import Settings
from src.agents.decoding import decode_summary
from src.models.schemas import SummaryResult
import logging

logger = logging.getLogger(__name__)

class ChatAgent:
    """OpenAI Chatbot client."""

    def __init__(self, config: Settings):
        self.config = config
        self.client = AsyncOpenAI(api_key=config.openai_api_key)
        self.model = config.openai_llm_model

    async def chat(self, messages: List[dict]) -> str:
        """
        Send a list of messages to the OpenAI chat model and get the response.
        Makes exactly one request; transport and API errors propagate.

        Args:
            messages: List of message dicts (e.g., [{"role": "user", "content": "Hello"}])

        Returns:
            The assistant's reply as a string (empty if the model returned no content).
        """
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages
        )
        return response.choices[0].message.content or ""

    async def chat_single(self, prompt: str) -> str:
        """
        Send a single prompt to the OpenAI chat model and get the response.

        Args:
            prompt: The user's prompt as a string.

        Returns:
            The assistant's reply as a string.
        """
        messages = [{"role": "user", "content": prompt}]
        return await self.chat(messages)


class FeedbackSummarizer:
    """Summarize standup feedback comments into highlights and improvement areas."""

    def __init__(self, agent: ChatAgent):
        """
        Initialize the summarizer.

        Args:
            agent: Chat client used for the single summarization call
        """
        self.agent = agent

    def build_prompt(self, comments: List[str]) -> str:
        """Embed all comments verbatim, one per line, into the summary prompt."""
        comment_block = "\n".join(comments)
        return f"""You are analyzing feedback that attendees left after an instructor's daily standup sessions.

            Task: From the comments below, return a valid JSON object with exactly two keys:
            - "positiveFeedback": an array of at most 3 objects for the most positive comments.
              Each object has "quote" (the comment copied verbatim) and "keywords"
              (an array of 1 to 3 short strings describing what was praised).
            - "improvementAreas": an array of at most 3 objects for distinct areas to improve.
              Each object has "theme" (a short summarized area) and "suggestion"
              (one actionable suggestion for the instructor).

            If there are fewer than 3 items for a key, return what you can. If nothing fits, use an empty array.

            Example format:
            {{
            "positiveFeedback": [{{"quote": "Great session", "keywords": ["engaging"]}}],
            "improvementAreas": [{{"theme": "Pacing", "suggestion": "Slow down during demos"}}]
            }}

            Return ONLY the JSON object.

            Comments:
            \"\"\"{comment_block}\"\"\"

            Response:"""

    async def summarize(self, comments: List[str]) -> SummaryResult:
        """
        Summarize comments with one LLM call.

        Args:
            comments: Meaningful comments in record order

        Returns:
            SummaryResult; empty when there are no comments or the reply cannot be decoded
        """
        if not comments:
            return SummaryResult()

        logger.info(f"Requesting summary for {len(comments)} comments")
        response = await self.agent.chat_single(self.build_prompt(comments))

        decoded = decode_summary(response)
        if not decoded.ok:
            logger.warning(f"Could not decode feedback summary, returning empty summary: {decoded.error}")
            return SummaryResult()

        return decoded.value
