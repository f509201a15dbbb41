"""Domain layer (pure logic).

- Keep game rules for rounds, credits, treasure and ranking here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI.
- Time is passed in as an argument (milliseconds); nothing here reads the clock.
"""
