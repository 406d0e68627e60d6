import random
import shutil
import tempfile
import unittest
from datetime import date
from pathlib import Path

from fakes import FakeSupabase, FakeAPIError

from weekfit.domain.ProgressEntry import ProgressEntry
from weekfit.domain.WeeklyMenu import WeeklyMenu
from weekfit.infra.Achievement_Repository import AchievementRepository
from weekfit.infra.Base_Repository import BaseRepository, MissingTableError, is_missing_table
from weekfit.infra.Challenge_Repository import ChallengeRepository, DailyChallengeRepository
from weekfit.infra.Local_Store import LocalStore
from weekfit.infra.Menu_Repository import MenuRepository, current_week_start
from weekfit.infra.Profile_Repository import ProfileRepository
from weekfit.infra.Progress_Repository import ProgressRepository

USER = {"id": "user-1", "email": "ana@example.com", "user_metadata": {"full_name": "Ana"}}
ALL_TABLES = ("profiles", "weekly_menus", "challenges", "daily_challenges",
              "achievements", "user_achievements", "user_progress")


class StoreTestCase(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.store = LocalStore(Path(self.tmpdir) / "store.json")

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)


class TestLocalStore(StoreTestCase):
    def test_set_get_delete(self):
        self.assertIsNone(self.store.get("missing"))
        self.store.set("a", {"x": 1})
        self.assertEqual(LocalStore(self.store.path).get("a"), {"x": 1})
        self.store.delete("a")
        self.assertEqual(self.store.keys(), [])

    def test_corrupt_file_reads_empty(self):
        self.store.path.write_text("{not json", encoding="utf-8")
        self.assertEqual(self.store.get("a", "default"), "default")


class TestMissingTableDetection(unittest.TestCase):
    def test_detection(self):
        self.assertTrue(is_missing_table(FakeAPIError("x", code="42P01")))
        self.assertTrue(is_missing_table(FakeAPIError('relation "public.profiles" does not exist')))
        self.assertFalse(is_missing_table(FakeAPIError("connection reset", code="500")))

    def test_other_errors_propagate(self):
        repo = BaseRepository(FakeSupabase(broken=["profiles"]))
        repo.table = "profiles"
        with self.assertRaises(FakeAPIError):
            repo._run(repo._table().select("*"))

    def test_no_client_is_missing_table(self):
        with self.assertRaises(MissingTableError):
            BaseRepository(None)._table("profiles")


class TestProfileRepository(StoreTestCase):
    def test_creates_default_profile(self):
        db = FakeSupabase()
        profile = ProfileRepository(db, self.store).get_or_create(USER)
        self.assertEqual(profile.level, "Bronze")
        self.assertEqual(profile.full_name, "Ana")
        self.assertEqual(len(db.tables["profiles"]), 1)

    def test_add_points_promotes_and_persists(self):
        db = FakeSupabase()
        repo = ProfileRepository(db, self.store)
        repo.get_or_create(USER)
        repo.add_points(USER, 600)
        row = db.tables["profiles"][0]
        self.assertEqual(row["points"], 600)
        self.assertEqual(row["level"], "Silver")

    def test_missing_table_uses_local_store(self):
        repo = ProfileRepository(FakeSupabase(missing=ALL_TABLES), self.store)
        repo.add_points(USER, 120)
        self.assertEqual(self.store.get("profile_user-1")["points"], 120)
        self.assertEqual(repo.get_or_create(USER).points, 120)

    def test_preferences_round_trip(self):
        repo = ProfileRepository(None, self.store)
        repo.save_preferences(USER, {"goal": "healthy", "restrictions": ["vegan"]})
        self.assertEqual(repo.get_preferences("user-1")["restrictions"], ["vegan"])
        self.assertIsNone(repo.get_preferences("someone-else"))


class TestMenuRepository(StoreTestCase):
    def _menu(self, name):
        return WeeklyMenu(user_id="user-1", week_start="2025-01-06", meals={"monday": {"lunch": name}})

    def test_sample_menu_when_nothing_saved(self):
        menu = MenuRepository(None, self.store).latest("user-1")
        self.assertTrue(menu.is_sample)
        self.assertEqual(len(menu.days()), 7)

    def test_latest_remote_menu(self):
        repo = MenuRepository(FakeSupabase(), self.store)
        repo.save(self._menu("First"))
        repo.save(self._menu("Second"))
        latest = repo.latest("user-1")
        self.assertEqual(latest.get_meal("monday", "lunch"), "Second")
        self.assertFalse(latest.is_sample)

    def test_save_updates_existing_row(self):
        db = FakeSupabase()
        repo = MenuRepository(db, self.store)
        menu = repo.save(self._menu("First"))
        menu.set_meal("monday", "lunch", "Changed")
        repo.save(menu)
        self.assertEqual(len(db.tables["weekly_menus"]), 1)
        self.assertEqual(repo.latest("user-1").get_meal("monday", "lunch"), "Changed")

    def test_missing_table_falls_back_to_local(self):
        repo = MenuRepository(FakeSupabase(missing=ALL_TABLES), self.store)
        saved = repo.save(self._menu("Local lunch"))
        self.assertEqual(saved.id, "local-user-1")
        self.assertIsNotNone(self.store.get("menu_user-1"))
        self.assertEqual(repo.latest("user-1").get_meal("monday", "lunch"), "Local lunch")

    def test_current_week_start_is_monday(self):
        self.assertEqual(current_week_start(date(2025, 1, 9)), "2025-01-06")
        self.assertEqual(current_week_start(date(2025, 1, 6)), "2025-01-06")


class TestChallengeRepositories(StoreTestCase):
    def test_defaults_inserted_once(self):
        db = FakeSupabase()
        repo = ChallengeRepository(db, self.store)
        self.assertEqual(len(repo.list("user-1")), 3)
        self.assertEqual(len(repo.list("user-1")), 3)
        self.assertEqual(len(db.tables["challenges"]), 3)

    def test_complete_credits_once(self):
        repo = ChallengeRepository(FakeSupabase(), self.store)
        challenge = repo.list("user-1")[0]
        _, points = repo.complete("user-1", challenge.id)
        self.assertEqual(points, challenge.points_reward)
        _, again = repo.complete("user-1", challenge.id)
        self.assertEqual(again, 0)

    def test_unknown_challenge(self):
        with self.assertRaises(KeyError):
            ChallengeRepository(None, self.store).complete("user-1", "nope")

    def test_local_completion_state(self):
        repo = ChallengeRepository(FakeSupabase(missing=ALL_TABLES), self.store)
        ids = [c.id for c in repo.list("user-1")]
        self.assertEqual(ids, ["default-1", "default-2", "default-3"])
        repo.complete("user-1", "default-2")
        done = {c.id: c.completed for c in repo.list("user-1")}
        self.assertTrue(done["default-2"])
        self.assertFalse(done["default-1"])

    def test_daily_challenges_stable_for_the_day(self):
        db = FakeSupabase()
        repo = DailyChallengeRepository(db, self.store, rng=random.Random(7))
        day = date(2025, 1, 6)
        first = repo.for_day("user-1", day)
        self.assertEqual(len(first), 3)
        self.assertEqual(len({c.challenge_type for c in first}), 3)
        second = repo.for_day("user-1", day)
        self.assertEqual([c.id for c in first], [c.id for c in second])

    def test_meals_logged_counts_log_challenges(self):
        repo = DailyChallengeRepository(None, self.store, rng=random.Random(1))
        day = date(2025, 1, 6)
        for challenge in repo.for_day("user-1", day):
            repo.complete("user-1", challenge.id, day)
        expected = sum(1 for c in repo.for_day("user-1", day) if c.is_meal_log)
        self.assertEqual(repo.count_meals_logged("user-1"), expected)


class TestAchievementRepository(StoreTestCase):
    def test_default_catalog_when_table_missing(self):
        repo = AchievementRepository(FakeSupabase(missing=ALL_TABLES), self.store)
        self.assertEqual(len(repo.catalog()), 6)

    def test_check_and_unlock(self):
        profiles = ProfileRepository(None, self.store)
        repo = AchievementRepository(None, self.store)
        newly = repo.check_and_unlock(USER, streak=3, meals_logged=1, profiles=profiles)
        self.assertEqual(sorted(a.id for a in newly), ["meals-1", "streak-3"])
        self.assertEqual(profiles.get_or_create(USER).points, 40)
        self.assertEqual(repo.check_and_unlock(USER, streak=3, meals_logged=1, profiles=profiles), [])

    def test_unlocked_remote(self):
        db = FakeSupabase()
        repo = AchievementRepository(db, self.store)
        achievement = repo.catalog()[0]
        repo.unlock("user-1", achievement)
        self.assertIn(achievement.id, repo.unlocked("user-1"))
        self.assertEqual(db.tables["user_achievements"][0]["achievement_id"], achievement.id)


class TestProgressRepository(StoreTestCase):
    def test_local_history_sorted_and_limited(self):
        repo = ProgressRepository(None, self.store)
        for day in (12, 3, 7):
            repo.add(ProgressEntry(recorded_date=date(2025, 1, day), weight=80 - day / 10, user_id="user-1"))
        history = repo.history("user-1")
        self.assertEqual([e.recorded_date.day for e in history], [3, 7, 12])
        self.assertTrue(all(e.id for e in history))
        self.assertEqual([e.recorded_date.day for e in repo.history("user-1", limit=2)], [7, 12])

    def test_remote_history(self):
        db = FakeSupabase()
        repo = ProgressRepository(db, self.store)
        repo.add(ProgressEntry(recorded_date=date(2025, 2, 1), weight=81, user_id="user-1"))
        repo.add(ProgressEntry(recorded_date=date(2025, 1, 1), weight=82, user_id="user-1"))
        history = repo.history("user-1")
        self.assertEqual([e.weight for e in history], [82.0, 81.0])
        self.assertEqual(self.store.keys(), [])


class TestBackendErrorsDegrade(StoreTestCase):
    """Errors other than a missing table (network, RLS, 5xx) fall back instead of propagating."""

    def test_profile_falls_back_to_default(self):
        profile = ProfileRepository(FakeSupabase(broken=["profiles"]), self.store).get_or_create(USER)
        self.assertEqual(profile.id, "user-1")
        self.assertEqual(profile.level, "Bronze")
        self.assertEqual(profile.full_name, "Ana")

    def test_profile_prefers_local_copy(self):
        self.store.set("profile_user-1", {"id": "user-1", "level": "Silver", "points": 600})
        profile = ProfileRepository(FakeSupabase(broken=["profiles"]), self.store).get_or_create(USER)
        self.assertEqual((profile.level, profile.points), ("Silver", 600))

    def test_menu_falls_back_to_local_then_sample(self):
        repo = MenuRepository(FakeSupabase(broken=["weekly_menus"]), self.store)
        self.assertTrue(repo.latest("user-1").is_sample)
        self.store.set("menu_user-1", {"user_id": "user-1", "week_start": "2025-01-06",
                                       "meals": {"monday": {"lunch": "Cached lunch"}}})
        self.assertEqual(repo.latest("user-1").get_meal("monday", "lunch"), "Cached lunch")

    def test_challenges_empty(self):
        self.assertEqual(ChallengeRepository(FakeSupabase(broken=["challenges"]), self.store).list("user-1"), [])
