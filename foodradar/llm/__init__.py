"""
Gemini integration layer.

Responsibilities:
- Manage Gemini API configuration and credentials.
- Build the nearby-restaurants prompt from the user's coordinates.
- Call Gemini with Google Maps grounding and flatten its grounding citations.
"""
