# tests/test_services/test_publication_service.py
import unittest
from datetime import date

from fastapi import HTTPException
from sqlalchemy import create_engine, select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker, Session

from core.database import Base
import models_bootstrap  # noqa: F401

from client.models import Client
from property.models import Property
from publication.models import Publication, PublicationStatus, TimeSlot
from publication import service
from publication.schema import PublicationCreate, PublicationUpdate, PublicationErrorKind


class PublicationServiceTests(unittest.TestCase):
    def setUp(self):
        # Fresh in-memory DB
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)

        TestingSession = sessionmaker(bind=self.engine, future=True)
        self.db: Session = TestingSession()

        self.today = date(2025, 6, 23)

        # --- seed clients ---
        self.db.add_all([
            Client(id="c1", name="Client One", email="one@example.com"),
            Client(id="c2", name="Client Two", email="two@example.com"),
        ])
        self.db.flush()

        # --- seed properties ---
        self.db.add_all([
            Property(id="p-old", client_id="c1", address="15 Herzl St", type="apartment",
                     rooms=3, size=80, created_date=date(2025, 1, 1)),
            Property(id="p-new", client_id="c1", address="123 Jaffa St", type="garden apartment",
                     rooms=5, size=150, created_date=date(2025, 6, 22)),
            Property(id="p-idle", client_id="c1", address="8 HaNevi'im St", type="apartment",
                     rooms=2, size=60, created_date=date(2025, 3, 1)),
            Property(id="p-other", client_id="c2", address="42 Ben Gurion Blvd", type="house",
                     rooms=4, size=120, created_date=date(2025, 1, 1)),
        ])
        self.db.flush()

        # --- seed publications ---
        self.db.add_all([
            Publication(id="pub-past", property_id="p-old", client_id="c1",
                        date=date(2025, 6, 22), time_slot=TimeSlot.morning),
            Publication(id="pub-older", property_id="p-idle", client_id="c1",
                        date=date(2025, 6, 10), time_slot=TimeSlot.afternoon),
            Publication(id="pub-future", property_id="p-new", client_id="c1",
                        date=date(2025, 6, 26), time_slot=TimeSlot.evening,
                        status=PublicationStatus.scheduled),
            Publication(id="pub-c2", property_id="p-other", client_id="c2",
                        date=date(2025, 6, 24), time_slot=TimeSlot.morning),
        ])
        self.db.commit()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def _count(self) -> int:
        return self.db.scalar(select(func.count(Publication.id)))

    def _create(self, property_id, on, slot=TimeSlot.morning, client_id="c1"):
        dto = PublicationCreate(client_id=client_id, property_id=property_id, date=on, time_slot=slot)
        return service.create_publication(self.db, dto, today=self.today)

    # ---------- fetch / get_publications ----------

    def test_fetch_publications_scoped_and_ordered(self):
        rows = service.fetch_publications(self.db, "c1")
        self.assertEqual([r.id for r in rows], ["pub-older", "pub-past", "pub-future"])

    def test_fetch_publications_unknown_client_empty(self):
        self.assertEqual(service.fetch_publications(self.db, "nobody"), [])

    def test_get_publications_views(self):
        future = service.get_publications(self.db, client_id="c1", view="future", today=self.today)
        self.assertEqual([r.id for r in future], ["pub-future"])

        history = service.get_publications(self.db, client_id="c1", view="history", today=self.today)
        self.assertEqual([r.id for r in history], ["pub-past", "pub-older"])

        everything = service.get_publications(self.db, client_id="c1", today=self.today)
        self.assertEqual(len(everything), 3)

    def test_get_publication_for_client_ok_and_none(self):
        self.assertIsNotNone(service.get_publication_for_client(self.db, "pub-c2", "c2"))
        self.assertIsNone(service.get_publication_for_client(self.db, "pub-c2", "c1"))

    # ---------- create_publication ----------

    def test_create_publication_ok(self):
        row = self._create("p-new", date(2025, 6, 24), TimeSlot.afternoon)
        self.assertEqual(len(row.id), 32)
        self.assertEqual(row.status, PublicationStatus.published)
        self.assertEqual(row.time_slot, TimeSlot.afternoon)
        self.assertEqual(row.client_id, "c1")
        self.assertEqual(self._count(), 5)

    def test_create_publication_after_cooldown(self):
        # last published 2025-06-22, three days later is fine
        row = self._create("p-old", date(2025, 6, 25))
        self.assertEqual(row.property_id, "p-old")

    def test_create_publication_cooldown_409(self):
        with self.assertRaises(HTTPException) as ctx:
            self._create("p-old", date(2025, 6, 24))
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertEqual(ctx.exception.detail["error"], PublicationErrorKind.PROPERTY_COOLDOWN_ACTIVE.value)
        self.assertEqual(self._count(), 4)

    def test_create_publication_daily_limit_409(self):
        with self.assertRaises(HTTPException) as ctx:
            self._create("p-idle", date(2025, 6, 26))
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertEqual(ctx.exception.detail["error"], PublicationErrorKind.CLIENT_DAILY_LIMIT_EXCEEDED.value)

    def test_create_publication_other_clients_date_is_free(self):
        # c2 publishes on the 24th, c1 is unaffected
        row = self._create("p-idle", date(2025, 6, 24))
        self.assertEqual(row.date, date(2025, 6, 24))

    def test_create_publication_unknown_property_404(self):
        with self.assertRaises(HTTPException) as ctx:
            self._create("missing", date(2025, 6, 26))
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.detail["error"], PublicationErrorKind.PROPERTY_NOT_FOUND.value)

    def test_create_publication_other_clients_property_404(self):
        with self.assertRaises(HTTPException) as ctx:
            self._create("p-other", date(2025, 6, 25))
        self.assertEqual(ctx.exception.status_code, 404)

    def test_create_publication_booking_window(self):
        for bad in (date(2025, 6, 23), date(2025, 6, 20), date(2025, 7, 1)):
            with self.assertRaises(HTTPException) as ctx:
                self._create("p-idle", bad)
            self.assertEqual(ctx.exception.status_code, 422)
            self.assertEqual(ctx.exception.detail["error"], PublicationErrorKind.DATE_OUT_OF_RANGE.value)

        row = self._create("p-idle", date(2025, 6, 30))
        self.assertEqual(row.date, date(2025, 6, 30))

    def test_unique_client_date_constraint(self):
        # the store itself refuses a second row for the same client and day
        self.db.add(Publication(id="dup", property_id="p-idle", client_id="c1",
                                date=date(2025, 6, 26), time_slot=TimeSlot.morning))
        with self.assertRaises(IntegrityError):
            self.db.commit()
        self.db.rollback()

    # ---------- validate_request ----------

    def test_validate_request_does_not_write(self):
        result = service.validate_request(
            self.db, client_id="c1", property_id="p-old", target_date=date(2025, 6, 24), today=self.today
        )
        self.assertFalse(result.valid)
        self.assertEqual(result.error_kind, PublicationErrorKind.PROPERTY_COOLDOWN_ACTIVE)

        ok = service.validate_request(
            self.db, client_id="c1", property_id="p-idle", target_date=date(2025, 6, 24), today=self.today
        )
        self.assertTrue(ok.valid)
        self.assertEqual(self._count(), 4)

    # ---------- update_publication ----------

    def test_update_publication_moves_date(self):
        patch = PublicationUpdate(property_id="p-new", date=date(2025, 6, 27), time_slot=TimeSlot.morning)
        row = service.update_publication(self.db, "pub-future", "c1", patch, today=self.today)
        self.assertEqual(row.date, date(2025, 6, 27))
        self.assertEqual(row.time_slot, TimeSlot.morning)

    def test_update_publication_same_day_new_slot(self):
        # the row itself does not count against the daily limit
        patch = PublicationUpdate(property_id="p-new", date=date(2025, 6, 26), time_slot=TimeSlot.afternoon)
        row = service.update_publication(self.db, "pub-future", "c1", patch, today=self.today)
        self.assertEqual(row.time_slot, TimeSlot.afternoon)

    def test_update_publication_to_today_allowed(self):
        patch = PublicationUpdate(property_id="p-new", date=date(2025, 6, 23), time_slot=TimeSlot.evening)
        row = service.update_publication(self.db, "pub-future", "c1", patch, today=self.today)
        self.assertEqual(row.date, self.today)

    def test_update_publication_past_not_editable(self):
        patch = PublicationUpdate(property_id="p-old", date=date(2025, 6, 28), time_slot=TimeSlot.morning)
        with self.assertRaises(HTTPException) as ctx:
            service.update_publication(self.db, "pub-past", "c1", patch, today=self.today)
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertEqual(ctx.exception.detail["error"], PublicationErrorKind.PUBLICATION_NOT_EDITABLE.value)

    def test_update_publication_cooldown(self):
        patch = PublicationUpdate(property_id="p-old", date=date(2025, 6, 24), time_slot=TimeSlot.morning)
        with self.assertRaises(HTTPException) as ctx:
            service.update_publication(self.db, "pub-future", "c1", patch, today=self.today)
        self.assertEqual(ctx.exception.detail["error"], PublicationErrorKind.PROPERTY_COOLDOWN_ACTIVE.value)

    def test_update_publication_out_of_window(self):
        patch = PublicationUpdate(property_id="p-new", date=date(2025, 6, 20), time_slot=TimeSlot.morning)
        with self.assertRaises(HTTPException) as ctx:
            service.update_publication(self.db, "pub-future", "c1", patch, today=self.today)
        self.assertEqual(ctx.exception.status_code, 422)

    def test_update_publication_missing_or_foreign_404(self):
        patch = PublicationUpdate(property_id="p-new", date=date(2025, 6, 27), time_slot=TimeSlot.morning)
        for pid in ("nope", "pub-c2"):
            with self.assertRaises(HTTPException) as ctx:
                service.update_publication(self.db, pid, "c1", patch, today=self.today)
            self.assertEqual(ctx.exception.status_code, 404)
            self.assertEqual(ctx.exception.detail["error"], PublicationErrorKind.PUBLICATION_NOT_FOUND.value)

    # ---------- delete_publication ----------

    def test_delete_publication_deletes(self):
        service.delete_publication(self.db, "pub-future")
        self.assertIsNone(self.db.get(Publication, "pub-future"))

    def test_delete_publication_missing_is_noop(self):
        service.delete_publication(self.db, "nope")
        self.assertEqual(self._count(), 4)


if __name__ == "__main__":
    unittest.main()
