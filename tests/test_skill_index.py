from types import SimpleNamespace

from skillmatch.services.skill_index import (
    SkillIndex,
    clean_label,
    dedupe_skills,
    normalize,
    overlap,
)


def test_normalize_trims_collapses_and_casefolds():
    assert normalize("  Machine   Learning ") == "machine learning"
    assert normalize("PYTHON") == normalize("python")
    assert normalize("Straße") == normalize("STRASSE")
    assert normalize("") == ""


def test_clean_label_keeps_casing():
    assert clean_label("  Machine \t Learning ") == "Machine Learning"


def test_dedupe_skills_keeps_first_casing_and_drops_blanks():
    assert dedupe_skills(["Python", " python ", "Machine  Learning", "", "   "]) == [
        "Python",
        "Machine Learning",
    ]


def test_index_membership_uses_normalized_form():
    index = SkillIndex(teach=["React", "Node.js"], learn=["Machine Learning"])

    assert index.teaches("react")
    assert index.teaches(" NODE.JS ")
    assert not index.teaches("Python")
    assert index.wants("machine   learning")
    assert not index.wants("React")
    assert index.teach_label("REACT") == "React"


def test_for_user_reads_skill_rows():
    user = SimpleNamespace(
        skills=[
            SimpleNamespace(label="Go", skill_type="teach"),
            SimpleNamespace(label="Rust", skill_type="learn"),
        ]
    )
    index = SkillIndex.for_user(user)

    assert index.teaches("go")
    assert index.wants("rust")
    assert not index.wants("go")


def test_overlap_returns_offering_labels_sorted():
    teacher = SkillIndex(teach=["SQL", "css", "Python"], learn=[])
    student = SkillIndex(teach=[], learn=["python", "CSS", "Docker"])

    assert overlap(teacher, student) == ["css", "Python"]
    assert overlap(student, teacher) == []
