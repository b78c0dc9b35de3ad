from .summarizer import BedrockSummarizer, MockSummarizer

__all__ = ["BedrockSummarizer", "MockSummarizer"]
