"""Test 요청 스키마 검증 규칙을 확인하는 자동화 테스트입니다."""

import pytest
from pydantic import ValidationError

from foxclub.models.question import QuestionType
from foxclub.schemas.admin_note import AdminNoteCreate
from foxclub.schemas.form import SubmitFormRequest, Type1Answer, Type2Answer
from foxclub.schemas.question import QuestionCreate, QuestionFamilyCreate
from foxclub.schemas.user import BulkUserActionRequest, RegisterRequest, UserUpdate


def test_family_create_requires_label_and_known_type():
    family = QuestionFamilyCreate(label="Sorties", type="TYPE_1")
    assert family.type == QuestionType.TYPE_1
    assert family.order is None

    with pytest.raises(ValidationError):
        QuestionFamilyCreate(label="", type="TYPE_1")
    with pytest.raises(ValidationError):
        QuestionFamilyCreate(label="Sorties", type="TYPE_3")
    with pytest.raises(ValidationError):
        QuestionFamilyCreate(label="x" * 101, type="TYPE_2")
    with pytest.raises(ValidationError):
        QuestionFamilyCreate(label="Sorties", type="TYPE_2", order=-1)


def test_question_create_text_bounds():
    assert QuestionCreate(questionFamilyId=1, text="Cinema").question_family_id == 1
    with pytest.raises(ValidationError):
        QuestionCreate(questionFamilyId=1, text="")
    with pytest.raises(ValidationError):
        QuestionCreate(questionFamilyId=1, text="a" * 1001)


@pytest.mark.parametrize("score", [1, 4])
def test_score_boundaries_accepted(score):
    assert Type1Answer(score=score).score == score
    assert Type2Answer(score=score).score == score


@pytest.mark.parametrize("score", [0, 5, "3", 2.5])
def test_score_out_of_range_or_wrong_type_rejected(score):
    with pytest.raises(ValidationError):
        Type1Answer(score=score)


def test_type1_answer_defaults_and_rejects_include():
    answer = Type1Answer(score=3)
    assert (answer.top, answer.bot, answer.talk) == (False, False, False)
    with pytest.raises(ValidationError):
        Type1Answer(score=3, include=True)


def test_type2_answer_rejects_top_and_bot():
    assert Type2Answer(score=2, include=True, talk=True).include is True
    with pytest.raises(ValidationError):
        Type2Answer(score=2, top=True)
    with pytest.raises(ValidationError):
        Type2Answer(score=2, bot=True)


def test_notes_length_limit():
    assert Type1Answer(score=1, notes="n" * 2000).notes == "n" * 2000
    with pytest.raises(ValidationError):
        Type1Answer(score=1, notes="n" * 2001)


def test_submit_request_requires_at_least_one_answer():
    with pytest.raises(ValidationError):
        SubmitFormRequest(answers=[])
    payload = SubmitFormRequest(answers=[{"questionId": 1, "answer": {"score": 2}}])
    assert payload.submitted is False


def test_admin_note_content_bounds():
    with pytest.raises(ValidationError):
        AdminNoteCreate(userId=1, content="")
    with pytest.raises(ValidationError):
        AdminNoteCreate(userId=1, content="c" * 5001)
    assert AdminNoteCreate(userId=1, content="ok").pinned is False


def test_register_and_update_validate_fields():
    assert RegisterRequest(pseudo="renard", password="longenough", email="").email is None
    with pytest.raises(ValidationError):
        RegisterRequest(pseudo="ab", password="longenough")
    with pytest.raises(ValidationError):
        RegisterRequest(pseudo="renard", password="short")
    with pytest.raises(ValidationError):
        RegisterRequest(pseudo="renard", password="longenough", email="not-an-email")
    with pytest.raises(ValidationError):
        UserUpdate(role="SUPERUSER")


def test_bulk_action_requires_ids_and_known_action():
    with pytest.raises(ValidationError):
        BulkUserActionRequest(userIds=[], action="approve")
    with pytest.raises(ValidationError):
        BulkUserActionRequest(userIds=[1], action="ban")
