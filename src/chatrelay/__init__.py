"""Telegram relay for OpenAI-compatible chat, speech and image models."""
