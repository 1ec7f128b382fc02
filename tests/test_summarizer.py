"""Tests for extractive summary generation."""

from membound.context import Turn, TurnMetadata, generate_summary

QUESTION = TurnMetadata(is_question=True)


class TestGenerateSummary:
    """Tests for generate_summary."""

    def test_empty_input(self):
        assert generate_summary([]) == "0 previous messages exchanged."

    def test_no_key_points_falls_back_to_count(self):
        turns = [
            Turn(role="user", content="hello there"),
            Turn(role="assistant", content="Hi! Nice to meet you."),
            Turn(role="user", content="the weather is nice"),
        ]
        assert generate_summary(turns) == "3 previous messages exchanged."

    def test_name_extraction(self):
        turns = [Turn(role="user", content="Hi, my name is Priya.")]
        assert generate_summary(turns) == "User's name: Priya."

    def test_romanized_hindi_name(self):
        turns = [Turn(role="user", content="mera naam Rahul hai")]
        assert generate_summary(turns) == "User's name: Rahul."

    def test_employer_extraction(self):
        turns = [Turn(role="user", content="I work at Acme Corp. It is fun")]
        assert generate_summary(turns) == "Works at: Acme Corp."

    def test_project_extraction_truncated(self):
        name = "x" * 80
        turns = [Turn(role="assistant", content=f"Project: {name}. Done")]
        assert generate_summary(turns) == f"Project: {'x' * 50}."

    def test_user_questions_only(self):
        turns = [
            Turn(role="user", content="How do I deploy this?", metadata=QUESTION),
            Turn(role="assistant", content="Why not use docker?", metadata=QUESTION),
        ]
        summary = generate_summary(turns)
        assert "Asked about: How do I deploy this?" in summary
        assert "docker" not in summary

    def test_question_truncated_to_100_chars(self):
        content = "q" * 150 + "?"
        turns = [Turn(role="user", content=content, metadata=QUESTION)]
        assert generate_summary(turns) == f"Asked about: {'q' * 100}."

    def test_multiple_points_joined_in_order(self):
        turns = [
            Turn(role="user", content="my name is Dev"),
            Turn(role="user", content="I work for Globex"),
        ]
        assert generate_summary(turns) == "User's name: Dev. Works at: Globex."

    def test_deduplicates(self):
        turns = [
            Turn(role="user", content="my name is Dev"),
            Turn(role="user", content="As I said, my name is Dev"),
        ]
        assert generate_summary(turns) == "User's name: Dev."

    def test_caps_at_ten_points(self):
        turns = [
            Turn(role="user", content=f"question {i}?", metadata=QUESTION)
            for i in range(15)
        ]
        summary = generate_summary(turns)
        assert summary.count("Asked about:") == 10
        assert "question 9?" in summary
        assert "question 10?" not in summary
