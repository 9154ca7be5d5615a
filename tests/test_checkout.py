"""택배 수령 API 테스트.

Check-out API tests — Status transition, pickup stamping, notes merge and not-found.
"""

from datetime import datetime

from httpx import AsyncClient

from tests.conftest import URL, checkin_payload


class TestCheckOut:
    """수령 처리 테스트."""

    async def test_check_out(self, client: AsyncClient):
        """수령 처리 — PICKED_UP, 수령 일시 ≥ 접수 일시."""
        created = (await client.post(f"{URL}/checkin", json=checkin_payload())).json()

        res = await client.post(f"{URL}/checkout", json={
            "tracking_number": "SF123",
            "picked_up_by": "Bob",
        })
        assert res.status_code == 200
        data = res.json()
        assert data["status"] == "PICKED_UP"
        assert data["picked_up_by"] == "Bob"
        assert data["pickup_time"] is not None
        assert datetime.fromisoformat(data["pickup_time"]) >= datetime.fromisoformat(
            created["receive_time"]
        )
        assert data["received_by"] == "Alice"

    async def test_check_out_unknown(self, client: AsyncClient):
        """접수되지 않은 운송장 번호 수령 시 404."""
        res = await client.post(f"{URL}/checkout", json={
            "tracking_number": "NOPE",
            "picked_up_by": "Bob",
        })
        assert res.status_code == 404

    async def test_check_out_missing_staff(self, client: AsyncClient):
        """전달 직원 누락 시 422."""
        await client.post(f"{URL}/checkin", json=checkin_payload())
        res = await client.post(f"{URL}/checkout", json={"tracking_number": "SF123"})
        assert res.status_code == 422
        assert res.json()["detail"]["fields"] == ["picked_up_by"]

        lookup = await client.get(f"{URL}/SF123")
        assert lookup.json()["status"] == "RECEIVED"


class TestCheckOutNotes:
    """비고 이어 붙이기 테스트."""

    async def test_notes_appended(self, client: AsyncClient):
        """기존 비고 "X"에 "A", "B" 순서로 추가."""
        await client.post(f"{URL}/checkin", json=checkin_payload(notes="X"))

        res = await client.post(f"{URL}/checkout", json={
            "tracking_number": "SF123", "picked_up_by": "Bob", "notes": "A",
        })
        assert res.json()["notes"] == "X,A"

        res = await client.post(f"{URL}/checkout", json={
            "tracking_number": "SF123", "picked_up_by": "Carol", "notes": "B",
        })
        data = res.json()
        assert data["notes"] == "X,A,B"
        assert data["status"] == "PICKED_UP"
        assert data["picked_up_by"] == "Carol"

    async def test_notes_without_existing(self, client: AsyncClient):
        """기존 비고가 없으면 새 비고만 저장."""
        await client.post(f"{URL}/checkin", json=checkin_payload())
        res = await client.post(f"{URL}/checkout", json={
            "tracking_number": "SF123", "picked_up_by": "Bob", "notes": "left at door",
        })
        assert res.json()["notes"] == "left at door"

    async def test_no_notes_on_empty(self, client: AsyncClient):
        """기존/추가 비고 모두 없으면 빈 문자열."""
        await client.post(f"{URL}/checkin", json=checkin_payload())
        res = await client.post(f"{URL}/checkout", json={
            "tracking_number": "SF123", "picked_up_by": "Bob",
        })
        assert res.json()["notes"] == ""

    async def test_repeat_check_out_advances_pickup_time(self, client: AsyncClient):
        """재수령 처리는 거부되지 않고 수령 일시가 갱신됨."""
        await client.post(f"{URL}/checkin", json=checkin_payload())
        first = (await client.post(f"{URL}/checkout", json={
            "tracking_number": "SF123", "picked_up_by": "Bob",
        })).json()
        second = await client.post(f"{URL}/checkout", json={
            "tracking_number": "SF123", "picked_up_by": "Bob",
        })
        assert second.status_code == 200
        assert datetime.fromisoformat(second.json()["pickup_time"]) >= datetime.fromisoformat(
            first["pickup_time"]
        )

    async def test_notes_trimmed_before_merge(self, client: AsyncClient):
        """추가 비고는 공백 제거 후 이어 붙임."""
        await client.post(f"{URL}/checkin", json=checkin_payload(notes="X"))
        res = await client.post(f"{URL}/checkout", json={
            "tracking_number": "SF123", "picked_up_by": "Bob", "notes": "  A  ",
        })
        assert res.json()["notes"] == "X,A"

    async def test_blank_notes_count_as_absent(self, client: AsyncClient):
        """공백뿐인 추가 비고는 없는 것으로 취급."""
        await client.post(f"{URL}/checkin", json=checkin_payload(notes="X"))
        res = await client.post(f"{URL}/checkout", json={
            "tracking_number": "SF123", "picked_up_by": "Bob", "notes": "   ",
        })
        assert res.json()["notes"] == "X,"
