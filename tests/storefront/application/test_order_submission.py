"""Tests for OrderSubmitter — single-flight submission and its outcomes."""

import asyncio

import pytest
from storefront.checkout.exceptions import ConcurrentSubmissionError, SubmissionCancelled, SubmissionError
from storefront.checkout.session import CheckoutStep

pytestmark = pytest.mark.asyncio


class TestSuccessfulSubmission:
    async def test_returns_order_id(self, at_review, submitter):
        order_id = await submitter.submit(at_review)
        assert order_id.startswith("fake_ord_")
        assert at_review.session.order_id == order_id

    async def test_clears_cart_and_succeeds(self, at_review, submitter, cart_store, storage):
        await submitter.submit(at_review)

        assert cart_store.is_empty
        assert storage.data["cart"] == "[]"
        assert at_review.step == CheckoutStep.SUCCEEDED
        assert at_review.session.submission_lock is False

    async def test_sends_cart_snapshot_and_shipping(self, at_review, submitter, order_service):
        await submitter.submit(at_review)

        [call] = order_service.calls
        assert [line.product_id for line in call["cart"].lines] == ["prod-001"]
        assert call["cart"].totals.total_items == 2
        assert call["shipping_info"].email == "ada@example.com"

    async def test_signals_navigation(self, at_review, submitter, navigation):
        order_id = await submitter.submit(at_review)

        assert navigation.placed_orders == [order_id]
        assert navigation.redirect_target == "/account?order=success"

    async def test_begin_after_success_starts_new_session(self, at_review, submitter):
        first = at_review.session
        await submitter.submit(at_review)

        assert at_review.begin() is not first
        assert at_review.step == CheckoutStep.SHIPPING


class TestFailedSubmission:
    async def test_rejection_raises_and_fails_session(self, at_review, submitter, order_service):
        order_service.configure(should_succeed=False, failure_reason="Card declined", failure_code="card_declined")

        with pytest.raises(SubmissionError) as exc_info:
            await submitter.submit(at_review)

        assert exc_info.value.error.code == "card_declined"
        assert at_review.step == CheckoutStep.FAILED
        assert at_review.session.failure_reason == "Card declined"
        assert at_review.session.submission_lock is False

    async def test_rejection_keeps_cart_and_form(self, at_review, submitter, order_service, cart_store, navigation):
        order_service.configure(should_succeed=False)

        with pytest.raises(SubmissionError):
            await submitter.submit(at_review)

        assert cart_store.totals().total_items == 2
        assert at_review.session.payment_info.card_number == "4242 4242 4242 4242"
        assert navigation.placed_orders == []

    async def test_service_fault_is_a_submission_error(self, at_review, submitter, order_service, cart_store):
        order_service.fail_with(ConnectionError("backend unreachable"))

        with pytest.raises(SubmissionError) as exc_info:
            await submitter.submit(at_review)

        assert exc_info.value.error.code == "service_fault"
        assert at_review.step == CheckoutStep.FAILED
        assert at_review.session.submission_lock is False
        assert not cart_store.is_empty

    async def test_retry_after_failure(self, at_review, submitter, order_service, cart_store):
        order_service.configure(should_succeed=False)
        with pytest.raises(SubmissionError):
            await submitter.submit(at_review)

        assert at_review.retry() == CheckoutStep.REVIEW
        order_service.configure(should_succeed=True)
        assert await submitter.submit(at_review) is not None

        assert at_review.step == CheckoutStep.SUCCEEDED
        assert cart_store.is_empty
        assert len(order_service.calls) == 2

    async def test_failed_session_is_not_resubmitted_without_retry(self, at_review, submitter, order_service):
        order_service.configure(should_succeed=False)
        with pytest.raises(SubmissionError):
            await submitter.submit(at_review)

        assert await submitter.submit(at_review) is None
        assert len(order_service.calls) == 1


class TestReviewGuard:
    async def test_outside_review_nothing_is_submitted(self, controller, submitter, order_service, cart_store, lamp):
        cart_store.add(lamp)
        controller.begin()

        assert await submitter.submit(controller) is None
        assert controller.step == CheckoutStep.SHIPPING
        assert order_service.calls == []

    async def test_empty_cart_is_not_submitted(self, at_review, submitter, order_service, cart_store):
        cart_store.clear()

        assert await submitter.submit(at_review) is None
        assert at_review.step == CheckoutStep.REVIEW
        assert order_service.calls == []


class TestSingleFlight:
    async def test_second_submission_is_rejected_while_first_is_in_flight(self, at_review, submitter, order_service):
        order_service.hold()
        first = asyncio.create_task(submitter.submit(at_review))
        await asyncio.sleep(0)

        assert at_review.step == CheckoutStep.SUBMITTING
        assert at_review.session.submission_lock is True

        with pytest.raises(ConcurrentSubmissionError):
            await submitter.submit(at_review)

        order_service.release()
        order_id = await first

        assert order_id is not None
        assert len(order_service.calls) == 1
        assert at_review.step == CheckoutStep.SUCCEEDED

    async def test_rejected_duplicate_has_no_side_effects(self, at_review, submitter, order_service, cart_store):
        order_service.hold()
        first = asyncio.create_task(submitter.submit(at_review))
        await asyncio.sleep(0)

        with pytest.raises(ConcurrentSubmissionError):
            await submitter.submit(at_review)

        assert at_review.step == CheckoutStep.SUBMITTING
        assert cart_store.totals().total_items == 2

        order_service.release()
        await first

    async def test_back_to_back_submissions_reach_service_once(self, at_review, submitter, order_service):
        order_service.delay = 0.01
        results = await asyncio.gather(
            submitter.submit(at_review),
            submitter.submit(at_review),
            return_exceptions=True,
        )

        assert len(order_service.calls) == 1
        assert sum(isinstance(r, ConcurrentSubmissionError) for r in results) == 1
        assert sum(isinstance(r, str) for r in results) == 1


class TestCancellation:
    async def test_stale_completion_after_abandon_is_discarded(self, at_review, submitter, order_service, cart_store, navigation):
        order_service.hold()
        task = asyncio.create_task(submitter.submit(at_review))
        await asyncio.sleep(0)

        at_review.abandon()
        order_service.release()

        with pytest.raises(SubmissionCancelled):
            await task

        assert cart_store.totals().total_items == 2
        assert navigation.placed_orders == []
        assert not at_review.has_session

    async def test_stale_completion_does_not_touch_new_session(self, at_review, submitter, order_service):
        order_service.hold()
        task = asyncio.create_task(submitter.submit(at_review))
        await asyncio.sleep(0)

        at_review.abandon()
        fresh = at_review.begin()
        order_service.release()

        with pytest.raises(SubmissionCancelled):
            await task

        assert at_review.session is fresh
        assert fresh.current_step == CheckoutStep.SHIPPING
        assert fresh.submission_lock is False

    async def test_cancelled_task_releases_lock(self, at_review, submitter, order_service):
        order_service.hold()
        task = asyncio.create_task(submitter.submit(at_review))
        await asyncio.sleep(0)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert at_review.session.submission_lock is False
        assert at_review.step == CheckoutStep.FAILED
        assert at_review.retry() == CheckoutStep.REVIEW
