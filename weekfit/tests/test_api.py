from api_case import ApiTestCase, ANSWERS, USER
from fakes import FakeSupabase

from weekfit.api.api_run import app
from weekfit.api.dependencies import get_current_user
from weekfit.events import web_observers
from weekfit.logic.menu.generator import contains_meat


class TestQuestionnaireSubmit(ApiTestCase):
    def test_questions(self):
        resp = self.client.get("/api/questionnaire")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["count"], 7)

    def test_unauthenticated_submit_requires_login(self):
        resp = self.client.post("/api/questionnaire/submit", json=ANSWERS)
        self.assertEqual(resp.status_code, 401)
        self.assertTrue(resp.json()["detail"]["login_required"])
        self.assertEqual(self.store.keys(), [])

    def test_authenticated_submit_generates_menu(self):
        credentials = {"email": "ana@example.com", "password": "secret1"}
        self.client.post("/api/auth/signup", json=credentials)
        session = self.client.post("/api/auth/login", json=credentials).json()
        user_id = session["user"]["id"]
        headers = {"Authorization": f"Bearer {session['session']['access_token']}"}
        resp = self.client.post("/api/questionnaire/submit", json=ANSWERS, headers=headers)
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["redirect"], "/dashboard")
        self.assertFalse(any(contains_meat(m) for day in data["menu"]["meals"].values() for m in day.values()))
        self.assertEqual(self.store.get(f"preferences_{user_id}")["restrictions"], ["vegan"])

        menu = self.client.get("/api/menu", headers=headers).json()["menu"]
        self.assertFalse(menu["is_sample"])
        self.assertEqual(menu["meals"], data["menu"]["meals"])

    def test_invalid_answers(self):
        self.login_as()
        resp = self.client.post("/api/questionnaire/submit", json=dict(ANSWERS, goal="bulk"))
        self.assertEqual(resp.status_code, 422)


class TestQuestionnaireSubmitRemote(ApiTestCase):
    def make_db(self):
        return FakeSupabase()

    def test_unauthenticated_submit_persists_nothing(self):
        resp = self.client.post("/api/questionnaire/submit", json=ANSWERS,
                                headers={"Authorization": "Bearer not-a-token"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(self.db.tables, {})
        self.assertEqual(self.store.keys(), [])

    def test_submit_saves_menu_row(self):
        self.login_as()
        resp = self.client.post("/api/questionnaire/submit", json=ANSWERS)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(self.db.tables["weekly_menus"]), 1)
        self.assertEqual(self.db.tables["profiles"][0]["preferences"]["goal"], "weight_loss")


class TestMenuEndpoints(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.login_as()
        self.client.post("/api/questionnaire/submit", json=ANSWERS)

    def test_requires_login(self):
        app.dependency_overrides.pop(get_current_user)
        self.assertEqual(self.client.get("/api/menu").status_code, 401)

    def test_regenerate(self):
        before = self.client.get("/api/menu").json()["menu"]["meals"]["monday"]["breakfast"]
        resp = self.client.post("/api/menu/regenerate", json={"day": "Monday", "slot": "breakfast"})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertTrue(data["changed"])
        self.assertNotEqual(data["menu"]["meals"]["monday"]["breakfast"], before)
        after = self.client.get("/api/menu").json()["menu"]["meals"]["monday"]["breakfast"]
        self.assertEqual(after, data["menu"]["meals"]["monday"]["breakfast"])
        self.assertFalse(contains_meat(after))

    def test_regenerate_invalid_slot(self):
        resp = self.client.post("/api/menu/regenerate", json={"day": "monday", "slot": "brunch"})
        self.assertEqual(resp.status_code, 422)

    def test_shopping_list(self):
        data = self.client.get("/api/shopping-list").json()
        self.assertGreater(data["total_items"], 0)
        self.assertIn("proteins", data["shopping_list"])

    def test_menu_recipes(self):
        recipes = self.client.get("/api/menu/recipes").json()["recipes"]
        self.assertEqual(len(recipes), 21)
        self.assertTrue(all(r["recipe"]["ingredients"] for r in recipes))

    def test_recipe_detail(self):
        resp = self.client.get("/api/recipe", params={"meal": "Mushroom risotto", "slot": "dinner"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["recipe"]["cook_time"], 45)
        self.assertEqual(self.client.get("/api/recipe", params={"meal": " "}).status_code, 400)

    def test_pdf_export(self):
        resp = self.client.get("/api/menu/pdf")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["content-type"], "application/pdf")
        self.assertTrue(resp.content.startswith(b"%PDF"))


class TestDashboardAndChallenges(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.login_as()

    def test_dashboard_for_new_user(self):
        resp = self.client.get("/api/dashboard")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertTrue(data["menu"]["is_sample"])
        self.assertEqual(data["level"]["level"], "Bronze")
        self.assertEqual(data["profile"]["full_name"], "Ana")
        self.assertEqual(len(data["challenges"]), 3)
        self.assertEqual(len(data["daily_challenges"]), 3)
        self.assertEqual(len(data["achievements"]), 6)
        self.assertEqual(data["progress"]["stats"]["count"], 0)

    def test_complete_weekly_challenge(self):
        resp = self.client.post("/api/challenges/default-1/complete")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["points_earned"], 100)
        self.assertEqual(resp.json()["level"]["points"], 100)
        again = self.client.post("/api/challenges/default-1/complete").json()
        self.assertEqual(again["points_earned"], 0)
        self.assertEqual(self.client.post("/api/challenges/unknown/complete").status_code, 404)

    def test_complete_daily_meal_log_unlocks_first_achievement(self):
        daily = self.client.get("/api/daily-challenges").json()["daily_challenges"]
        meal_log = next(c for c in daily if c["challenge_type"].startswith("log_"))
        resp = self.client.post(f"/api/daily-challenges/{meal_log['id']}/complete")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["points_earned"], meal_log["points"])
        self.assertEqual([a["id"] for a in data["achievements_unlocked"]], ["meals-1"])
        self.assertEqual(data["level"]["points"], meal_log["points"] + 10)

        achievements = {a["id"]: a for a in self.client.get("/api/achievements").json()["achievements"]}
        self.assertTrue(achievements["meals-1"]["unlocked"])
        self.assertFalse(achievements["streak-3"]["unlocked"])

    def test_unknown_daily_challenge(self):
        self.assertEqual(self.client.post("/api/daily-challenges/nope/complete").status_code, 404)

    def test_notifications_after_challenge(self):
        web_observers.start()
        cursor = self.client.get("/api/notifications").json()["next_cursor"]
        self.client.post("/api/challenges/default-2/complete")
        events = self.client.get("/api/notifications", params={"since": cursor}).json()["events"]
        self.assertEqual([e["type"] for e in events], ["challenge.completed"])
        self.assertEqual(events[0]["user_id"], USER["id"])


class TestProgressAndAssistant(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.login_as()

    def test_record_progress(self):
        resp = self.client.post("/api/progress", json={"recorded_date": "2025-01-06", "weight": 80.5})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["entry"]["weight"], 80.5)
        self.client.post("/api/progress", json={"recorded_date": "2025-01-13", "weight": 79.5})
        data = self.client.get("/api/progress").json()
        self.assertEqual(len(data["entries"]), 2)
        self.assertEqual(data["stats"]["change"]["weight"], -1.0)

    def test_empty_progress_rejected(self):
        self.assertEqual(self.client.post("/api/progress", json={"notes": "nothing"}).status_code, 400)

    def test_recipe_assistant(self):
        resp = self.client.post("/api/recipe-assistant", json={"ingredients": "eggs, tomato"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()["recipes"]), 2)
        self.assertEqual(self.client.post("/api/recipe-assistant", json={"ingredients": ""}).status_code, 400)


class TestPages(ApiTestCase):
    def test_pages_render(self):
        for path in ("/", "/questionnaire", "/dashboard"):
            resp = self.client.get(path)
            self.assertEqual(resp.status_code, 200, path)
            self.assertIn("WeekFit", resp.text)

    def test_marketing(self):
        data = self.client.get("/api/marketing").json()
        self.assertEqual([p["name"] for p in data["pricing"]], ["Starter", "Premium", "Executive"])
        self.assertEqual(len(data["testimonials"]), 6)


class TestBackendOutage(ApiTestCase):
    def make_db(self):
        return FakeSupabase()

    def setUp(self):
        super().setUp()
        self.login_as()

    def test_dashboard_survives_profiles_error(self):
        self.db.broken.add("profiles")
        resp = self.client.get("/api/dashboard")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["profile"]["id"], USER["id"])
        self.assertEqual(data["level"]["level"], "Bronze")

    def test_dashboard_survives_every_table_failing(self):
        self.db.broken.update(["profiles", "weekly_menus", "challenges", "daily_challenges",
                               "achievements", "user_achievements", "user_progress"])
        resp = self.client.get("/api/dashboard")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertTrue(data["menu"]["is_sample"])
        self.assertEqual(data["challenges"], [])

    def test_menu_survives_weekly_menus_error(self):
        self.db.broken.add("weekly_menus")
        resp = self.client.get("/api/menu")
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["menu"]["is_sample"])
