import pytest

from src.service.box_office.domain.box_office_errors import VerificationFailure
from src.service.box_office.domain.entity.member_entity import Member
from src.service.box_office.domain.enum.verification_reason import VerificationReason
from src.service.box_office.domain.member_verification_domain import MemberVerifier
from test.factories import make_booking


@pytest.fixture
def verifier() -> MemberVerifier:
    return MemberVerifier()


@pytest.mark.unit
class TestMemberVerifier:
    @pytest.mark.parametrize('code', ['RIC-ASHA-1001', ' RIC-ASHA-1001 ', '1001'])
    def test_valid_unused_code(
        self, verifier: MemberVerifier, member_asha: Member, code: str
    ) -> None:
        member = verifier.verify(code=code, candidates=[member_asha], event_bookings=[])

        assert member.member_id == 1001

    def test_no_match_is_invalid(self, verifier: MemberVerifier, member_asha: Member) -> None:
        with pytest.raises(VerificationFailure) as exc_info:
            verifier.verify(code='RIC-NOBODY', candidates=[member_asha], event_bookings=[])

        assert exc_info.value.reason == VerificationReason.INVALID_CODE
        assert exc_info.value.context == {'reason': 'invalid_code', 'member_code': 'RIC-NOBODY'}

    def test_ambiguous_match_is_invalid(self, verifier: MemberVerifier, member_asha: Member) -> None:
        # Another member whose coupon code is Asha's numeric id
        clash = Member.create(
            member_id=2002, name='Dev Shah', email='dev@example.com', coupon_code='1001'
        )

        with pytest.raises(VerificationFailure) as exc_info:
            verifier.verify(code='1001', candidates=[member_asha, clash], event_bookings=[])

        assert exc_info.value.reason == VerificationReason.INVALID_CODE

    def test_code_used_in_same_event_is_rejected(
        self, verifier: MemberVerifier, member_asha: Member
    ) -> None:
        prior = make_booking(event_id='event-e', seat_ids=['Gold-A-1'], member=member_asha)

        with pytest.raises(VerificationFailure) as exc_info:
            verifier.verify(code='RIC-ASHA-1001', candidates=[member_asha], event_bookings=[prior])

        assert exc_info.value.reason == VerificationReason.ALREADY_USED

    def test_numeric_id_collides_with_used_coupon_code(
        self, verifier: MemberVerifier, member_asha: Member
    ) -> None:
        prior = make_booking(event_id='event-e', seat_ids=['Gold-A-1'], member=member_asha)

        with pytest.raises(VerificationFailure) as exc_info:
            verifier.verify(code='1001', candidates=[member_asha], event_bookings=[prior])

        assert exc_info.value.reason == VerificationReason.ALREADY_USED

    def test_other_member_in_same_event_is_fine(
        self, verifier: MemberVerifier, member_asha: Member, member_rohan: Member
    ) -> None:
        prior = make_booking(event_id='event-e', seat_ids=['Gold-A-1'], member=member_rohan)

        member = verifier.verify(
            code='RIC-ASHA-1001', candidates=[member_asha], event_bookings=[prior]
        )

        assert member == member_asha

    def test_member_claimed_earlier_in_same_checkout(
        self, verifier: MemberVerifier, member_asha: Member
    ) -> None:
        with pytest.raises(VerificationFailure) as exc_info:
            verifier.verify(
                code='1001',
                candidates=[member_asha],
                event_bookings=[],
                claimed_member_ids={1001},
            )

        assert exc_info.value.reason == VerificationReason.ALREADY_USED
