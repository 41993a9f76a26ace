import uuid
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from doubtdesk.domain.identity import Identity, Role
from doubtdesk.domain.lifecycle import DoubtStatus
from doubtdesk.domain.search import DoubtQuery, StatusFilter, matches, search
from doubtdesk.repositories.doubt_repository import DoubtRepository

ALICE = Identity(id=uuid.uuid4(), role=Role.STUDENT)
BOB = Identity(id=uuid.uuid4(), role=Role.STUDENT)
CAROL = Identity(id=uuid.uuid4(), role=Role.INSTRUCTOR)
T0 = datetime(2026, 3, 1, 12, 0)


def doubt(author, title, content, status=DoubtStatus.OPEN, minutes=0):
    return SimpleNamespace(
        author_id=author.id,
        title=title,
        content=content,
        status=status,
        created_at=T0 + timedelta(minutes=minutes),
    )


@pytest.fixture
def corpus():
    return [
        doubt(ALICE, "Why is the sky blue", "Explain Rayleigh scattering please", minutes=1),
        doubt(ALICE, "Recursion limits", "What is the default recursion depth?", DoubtStatus.RESOLVED, minutes=2),
        doubt(BOB, "Sorting stability", "Is Timsort stable for equal keys?", minutes=3),
        doubt(BOB, "SKY colour at sunset", "Why does it turn red in the evening?", DoubtStatus.RESOLVED, minutes=4),
    ]


class TestPureSearch:
    def test_student_sees_own_and_resolved(self, corpus):
        titles = [d.title for d in search(ALICE, corpus, DoubtQuery())]
        assert titles == ["SKY colour at sunset", "Recursion limits", "Why is the sky blue"]

    def test_instructor_sees_all_newest_first(self, corpus):
        found = search(CAROL, corpus, DoubtQuery())
        assert [d.created_at for d in found] == sorted((d.created_at for d in corpus), reverse=True)

    def test_text_is_case_insensitive_on_title_or_content(self, corpus):
        assert [d.title for d in search(CAROL, corpus, DoubtQuery(text="sky"))] == [
            "SKY colour at sunset",
            "Why is the sky blue",
        ]
        assert [d.title for d in search(CAROL, corpus, DoubtQuery(text="TIMSORT"))] == ["Sorting stability"]

    def test_status_filter_is_anded_with_visibility(self, corpus):
        found = search(BOB, corpus, DoubtQuery(status=StatusFilter.OPEN))
        assert [d.title for d in found] == ["Sorting stability"]

    def test_limit_caps_results(self, corpus):
        assert len(search(CAROL, corpus, DoubtQuery(limit=2))) == 2

    def test_blank_text_matches_everything(self, corpus):
        assert all(matches(CAROL, d, DoubtQuery(text="   ")) for d in corpus)


class TestRepositorySearch:
    @pytest.fixture
    def seeded(self, db_session, student, other_student, make_doubt):
        make_doubt(student, "Why is the sky blue", "Explain Rayleigh scattering please")
        make_doubt(student, "Recursion limits", "What is the default recursion depth?", DoubtStatus.RESOLVED)
        make_doubt(other_student, "Sorting stability", "Is Timsort stable for equal keys?")
        make_doubt(other_student, "SKY colour at sunset", "Why does it turn red in the evening?", DoubtStatus.RESOLVED)
        make_doubt(other_student, "Percent signs", "What does 100% coverage really mean?")
        return DoubtRepository(db_session)

    @pytest.mark.parametrize(
        "query",
        [
            DoubtQuery(),
            DoubtQuery(text="sky"),
            DoubtQuery(status=StatusFilter.RESOLVED),
            DoubtQuery(text="why", status=StatusFilter.OPEN),
            DoubtQuery(limit=1),
        ],
    )
    @pytest.mark.parametrize("who", ["student", "other_student", "instructor"])
    def test_sql_matches_pure_search(self, seeded, db_session, request, query, who):
        user = request.getfixturevalue(who)
        identity = user.identity()
        everything = seeded.list_doubts(
            request.getfixturevalue("instructor").identity(), DoubtQuery()
        )
        expected = [d.id for d in search(identity, everything, query)]
        assert [d.id for d in seeded.list_doubts(identity, query)] == expected

    def test_like_wildcards_are_literal(self, seeded, instructor):
        found = seeded.list_doubts(instructor.identity(), DoubtQuery(text="100%"))
        assert [d.title for d in found] == ["Percent signs"]
        assert seeded.list_doubts(instructor.identity(), DoubtQuery(text="%_%")) == []
