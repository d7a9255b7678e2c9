import unittest
from datetime import date

from support import backend_job, full_profile, partial_profile

from app.prompts.analysis import build_analysis_prompt
from app.prompts.quest import QUEST_THEMES, build_quest_prompt
from app.schemas.profile import Education, Experience, JobSummary, ProfileBundle


class AnalysisPromptTests(unittest.TestCase):
    def test_prompt_is_deterministic(self):
        profile = partial_profile()
        job = backend_job()
        self.assertEqual(build_analysis_prompt(profile, job), build_analysis_prompt(profile, job))

    def test_embeds_profile_and_job(self):
        prompt = build_analysis_prompt(partial_profile(), backend_job())

        self.assertIn("- Python (level: 80)", prompt)
        self.assertIn("- PostgreSQL (level: N/A)", prompt)
        self.assertIn("Software Engineer at Acme (Jakarta) (since 2021 (current)): Built payment APIs.", prompt)
        self.assertIn("Job tracker: A Django app for tracking applications.", prompt)
        self.assertIn("No education data", prompt)
        self.assertIn("No certifications", prompt)
        self.assertIn("- Position: Backend Engineer", prompt)
        self.assertIn("- Required skills: Python, Django, SQL, Docker, AWS, Kubernetes, GraphQL, Redis", prompt)
        self.assertIn('"matchScore"', prompt)
        self.assertIn("At least 400 words", prompt)

    def test_dates_reduced_to_years(self):
        prompt = build_analysis_prompt(full_profile(), backend_job())

        self.assertIn("Engineer at Acme (2019 - 2021)", prompt)
        self.assertIn("BSc Computer Science from State University", prompt)
        self.assertIn("AWS Developer from Amazon (2022)", prompt)

    def test_ended_position_without_end_date_reads_present(self):
        profile = ProfileBundle(
            experiences=[Experience(title="Intern", company="Beta", start_date=date(2020, 1, 1))],
            educations=[
                Education(school="Poly", degree="Diploma", start_date=date(2016, 1, 1), end_date=date(2019, 1, 1)),
                Education(school="Online", is_current=True),
            ],
        )
        prompt = build_analysis_prompt(profile, backend_job())

        self.assertIn("Intern at Beta (2020 - present)", prompt)
        self.assertIn("Diploma from Poly (2016 - 2019)", prompt)
        self.assertIn(" from Online (ongoing)", prompt)

    def test_free_text_is_truncated(self):
        job = JobSummary(title="Analyst", description_text="d" * 5000, qualifications_text="q" * 5000)
        profile = ProfileBundle(
            experiences=[
                Experience(title="T", company="C", start_date=date(2020, 1, 1), description="e" * 1000)
            ],
            educations=[Education(school="S", description="s" * 1000)],
        )
        prompt = build_analysis_prompt(profile, job)

        self.assertIn("d" * 1500, prompt)
        self.assertNotIn("d" * 1501, prompt)
        self.assertNotIn("q" * 1501, prompt)
        self.assertIn("e" * 200, prompt)
        self.assertNotIn("e" * 201, prompt)
        self.assertIn("s" * 150, prompt)
        self.assertNotIn("s" * 151, prompt)


class QuestPromptTests(unittest.TestCase):
    def test_theme_and_rules(self):
        prompt = build_quest_prompt(
            "Backend Engineer", "Build services", "APIs", ["Python", "SQL"], QUEST_THEMES[4]
        )
        self.assertIn('role "Backend Engineer"', prompt)
        self.assertIn("Thematic focus: Risk, security, or compliance.", prompt)
        self.assertIn("integer 10-100", prompt)
        self.assertIn("Key skills: Python, SQL", prompt)

    def test_without_theme_asks_for_variety(self):
        prompt = build_quest_prompt("Designer", None, None, [])
        self.assertIn("vary the scenario framing", prompt)
        self.assertIn("Key skills: -", prompt)
        self.assertEqual(prompt, build_quest_prompt("Designer", None, None, []))

    def test_five_themes(self):
        self.assertEqual(len(set(QUEST_THEMES)), 5)


if __name__ == "__main__":
    unittest.main()
