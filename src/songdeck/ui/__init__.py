"""Textual widgets and the song modal controller."""
