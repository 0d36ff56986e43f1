"""
ANiLab Chat Assistant - Console Entry Point
Talk to the assistant from a terminal using the same engine as the HTTP backend.
"""

import asyncio

from dotenv import load_dotenv

load_dotenv()

from assistant.logging_config import setup_logging  # noqa: E402
from backend.core.config import get_settings  # noqa: E402
from backend.services.chat_service import build_engine  # noqa: E402


async def run_console():
    engine = build_engine(get_settings())
    session_key = "console"
    try:
        while True:
            user_input = input("\nVy: ")
            if user_input.strip().lower() in ["exit", "quit", "koniec"]:
                print("Dovidenia!")
                break

            if not user_input.strip():
                continue

            try:
                result = await engine.reply(user_input, session_key)
                print(f"Asistent: {result.reply}")
            except Exception as e:
                print(f"Chyba: {str(e)}")
    finally:
        await engine.aclose()


def main():
    """Main function to run the assistant in a terminal."""
    setup_logging()
    print("ANiLab Chat Assistant\n" + "=" * 50)
    print("Napíšte 'exit' pre ukončenie\n")
    asyncio.run(run_console())


if __name__ == "__main__":
    main()
