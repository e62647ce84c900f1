#!/usr/bin/env python3
"""
Generate one batch of MCQs and print them.
Uses the Hugging Face router when HUGGINGFACE_API_KEY and HUGGINGFACE_MODEL_ID are set in backend/.env,
the mock transport otherwise. Run from backend: python scripts/generate_questions.py "Java OOP" medium 5
"""
import argparse
import logging
import sys
from pathlib import Path

# Ensure backend is on path when run without installing the package
_backend = Path(__file__).resolve().parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

from quizgen.exceptions import GenerationError  # noqa: E402
from quizgen.services.generation_service import generate_questions  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("topic")
    parser.add_argument("difficulty", nargs="?", default="medium")
    parser.add_argument("count", nargs="?", type=int, default=None)
    args = parser.parse_args()

    try:
        questions = generate_questions(args.topic, args.difficulty, args.count)
    except GenerationError as e:
        print(f"Generation failed ({type(e).__name__}, retryable={e.retryable}): {e}")
        return 1

    print(f"Result: {len(questions)} MCQs")
    for i, q in enumerate(questions, start=1):
        print(f"\n{i}. {q.question_text}")
        for label, text in q.labeled_options().items():
            print(f"   {label}. {text}")
        print(f"   Answer: {q.correct_option} ({q.correct_option_text or 'option missing'})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
