"""Quiz generation core: prompt contract, model transport, and MCQ text parser."""
