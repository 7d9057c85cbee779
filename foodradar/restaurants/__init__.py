"""
Nearby restaurant discovery.

Responsibilities:
- Parse Gemini's free-text listing into structured restaurant records.
- Match restaurant names against grounding citations to recover map links.
- Serve a canned restaurant list in demo mode or when Gemini gives nothing usable.
"""
