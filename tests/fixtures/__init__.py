"""
Test fixtures for the Moderation Aggregator.

Contains recorded-shape provider responses:
- openai_moderation_clean.json: OpenAI moderation response, nothing flagged
- openai_moderation_flagged.json: OpenAI moderation response, hate flagged
- perspective_analyze.json: Perspective analyze response (toxicity 0.85, insult 0.7)
"""
