"""
Tests unitaires des règles de validation.

La date du jour est passée explicitement : les tests la figent.
"""

import uuid
from datetime import date, timedelta

from timeoff.domain import events
from timeoff.domain.model import (
    Boundary,
    Cancelled,
    HalfDay,
    NotCreated,
    PendingValidation,
    Refused,
    TimeOffRequest,
    ToCancelTimeOffRefused,
    ToCancelTimeOffRequested,
    Validated,
)
from timeoff.domain.rules import (
    ErrorKind,
    Ok,
    Rejected,
    accept_cancellation,
    cancel_active_requests,
    cancel_request,
    create_request,
    overlap_with_any_request,
    refuse_cancellation,
    request_cancellation,
    validate_request,
)

TODAY = date(2017, 12, 1)


def request_starting(start: date) -> TimeOffRequest:
    return TimeOffRequest(
        user_id=1,
        request_id=uuid.uuid4(),
        start=Boundary(start, HalfDay.AM),
        end=Boundary(start + timedelta(days=2), HalfDay.PM),
    )


def always_overlaps(requests, request) -> bool:
    return True


class TestOverlap:
    def test_le_prédicat_par_défaut_ne_détecte_rien(self):
        request = request_starting(TODAY)
        assert not overlap_with_any_request([request], request)


class TestCreateRequest:
    def test_une_demande_future_est_créée(self):
        request = request_starting(TODAY + timedelta(days=1))
        assert create_request([], request, TODAY) == Ok([events.RequestCreated(request)])

    def test_une_demande_commençant_aujourd_hui_est_refusée(self):
        request = request_starting(TODAY)
        assert create_request([], request, TODAY) == Rejected(ErrorKind.STARTS_IN_PAST)

    def test_une_demande_passée_est_refusée(self):
        request = request_starting(TODAY - timedelta(days=3))
        assert create_request([], request, TODAY) == Rejected(ErrorKind.STARTS_IN_PAST)

    def test_le_chevauchement_est_vérifié_en_premier(self):
        request = request_starting(TODAY - timedelta(days=3))
        result = create_request([request], request, TODAY, overlaps=always_overlaps)
        assert result == Rejected(ErrorKind.OVERLAPPING_REQUEST)


class TestRequestCancellation:
    def test_un_congé_commencé_peut_être_annulé(self):
        request = request_starting(TODAY - timedelta(days=1))
        assert request_cancellation([], request, TODAY) == Ok(
            [events.CancellationRequested(request)]
        )

    def test_un_congé_commençant_aujourd_hui_peut_être_annulé(self):
        request = request_starting(TODAY)
        assert isinstance(request_cancellation([], request, TODAY), Ok)

    def test_un_congé_futur_ne_peut_pas_être_annulé(self):
        request = request_starting(TODAY + timedelta(days=1))
        assert request_cancellation([], request, TODAY) == Rejected(ErrorKind.STARTS_IN_FUTURE)

    def test_chevauchement(self):
        request = request_starting(TODAY)
        result = request_cancellation([], request, TODAY, overlaps=always_overlaps)
        assert result == Rejected(ErrorKind.OVERLAPPING_REQUEST)


class TestCancelRequest:
    def test_une_demande_future_est_refusée_par_le_manager(self):
        request = request_starting(TODAY + timedelta(days=1))
        assert cancel_request([request], request, TODAY) == Ok([events.RequestRefused(request)])

    def test_une_demande_commençant_aujourd_hui_ne_peut_plus_être_refusée(self):
        request = request_starting(TODAY)
        assert cancel_request([request], request, TODAY) == Rejected(ErrorKind.STARTS_IN_PAST)

    def test_une_demande_commencée_ne_peut_plus_être_refusée(self):
        request = request_starting(TODAY - timedelta(days=2))
        assert cancel_request([request], request, TODAY) == Rejected(ErrorKind.STARTS_IN_PAST)

    def test_chevauchement(self):
        request = request_starting(TODAY + timedelta(days=1))
        result = cancel_request([request], request, TODAY, overlaps=always_overlaps)
        assert result == Rejected(ErrorKind.OVERLAPPING_REQUEST)


class TestValidateRequest:
    def test_une_demande_en_attente_est_validée(self):
        request = request_starting(TODAY)
        assert validate_request(PendingValidation(request)) == Ok(
            [events.RequestValidated(request)]
        )

    def test_une_demande_validée_ne_peut_pas_l_être_à_nouveau(self):
        request = request_starting(TODAY)
        assert validate_request(Validated(request)) == Rejected(ErrorKind.INVALID_TRANSITION)

    def test_une_demande_inexistante_ne_peut_pas_être_validée(self):
        assert validate_request(NotCreated()) == Rejected(ErrorKind.INVALID_TRANSITION)


class TestCancelActiveRequests:
    def test_toute_demande_active_est_refusée(self):
        request = request_starting(TODAY)
        for state in (
            PendingValidation(request),
            ToCancelTimeOffRequested(request),
            ToCancelTimeOffRefused(request),
            Validated(request),
        ):
            assert cancel_active_requests(state) == Ok([events.RequestRefused(request)])

    def test_une_demande_inactive_ne_peut_pas_être_annulée(self):
        request = request_starting(TODAY)
        for state in (NotCreated(), Refused(request), Cancelled(request)):
            assert cancel_active_requests(state) == Rejected(ErrorKind.INVALID_TRANSITION)


class TestCancellationDecision:
    def test_accepter_une_annulation_annule_le_congé(self):
        request = request_starting(TODAY)
        assert accept_cancellation(ToCancelTimeOffRequested(request)) == Ok([
            events.CancellationAccepted(request),
            events.RequestCancelled(request),
        ])

    def test_refuser_une_annulation(self):
        request = request_starting(TODAY)
        assert refuse_cancellation(ToCancelTimeOffRequested(request)) == Ok(
            [events.CancellationRefused(request)]
        )

    def test_sans_demande_d_annulation_rien_à_décider(self):
        request = request_starting(TODAY)
        assert accept_cancellation(Validated(request)) == Rejected(ErrorKind.INVALID_TRANSITION)
        assert refuse_cancellation(Validated(request)) == Rejected(ErrorKind.INVALID_TRANSITION)


def test_chaque_motif_de_refus_a_un_message():
    assert {kind.message for kind in ErrorKind} == {
        "Overlapping request",
        "The request starts in the past",
        "The request starts in the future",
        "The request cannot make this transition",
    }
