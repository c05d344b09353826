"""
Integration test: the full proposal lifecycle against a file-backed store
"""

from rfp_engine.persistence import JsonFileBackend
from rfp_engine.store import ProposalStore
from rfp_engine.store_schema import ProposalCreate, ProposalStatus, QuestionSource


def test_website_redesign_lifecycle(file_store, temp_dir):
    store = file_store
    events = []
    store.subscribe(events.append)

    proposal = store.proposals.create(ProposalCreate(
        title="Website Redesign",
        description="Complete redesign of corporate website with modern UI/UX",
        owner_id=2,
    ))

    questions = store.generate_ai_questions(proposal.id, proposal.title, proposal.description)
    assert len(questions) == 7
    assert [q.order for q in questions] == list(range(7))
    assert {q.source for q in questions} == {QuestionSource.AI}
    assert questions[-1].question.startswith("Please elaborate on: ")

    first = questions[0]
    store.answers.set_answer(first.id, "Increase conversion rate")
    assert store.answers.get_by_question(first.id).answer == "Increase conversion rate"

    share = store.share_tokens.get_or_create(proposal.id)
    store.files.add_bytes(proposal.id, "brand.txt", b"colours")
    store.collaborations.add(proposal.id, 3, "writer")

    document = store.generate_proposal_document(proposal.id)
    assert document.status == ProposalStatus.IN_PROGRESS
    assert "Increase conversion rate" in document.content["requirementsAndAnswers"]
    assert "(No answer)" in document.content["requirementsAndAnswers"]

    # A fresh store over the same directory sees everything
    reopened = ProposalStore(backend=JsonFileBackend(temp_dir / "data"))
    assert reopened.proposals.get(proposal.id) == document
    assert reopened.proposals.get_by_share_token(share.token) == document

    assert store.proposals.delete(proposal.id) is True
    assert store.questions.list(proposal.id) == []
    assert store.answers.list_for_questions([q.id for q in questions]) == []
    assert store.files.list(proposal.id) == []
    assert store.share_tokens.get(share.token) is None
    assert store.collaborations.list_by_proposal(proposal.id) == []

    # create, generate, answer, token, file, collaboration, document, delete
    assert len(events) == 8
