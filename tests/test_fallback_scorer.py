import unittest

from support import backend_job, full_profile, partial_profile

from app.schemas.profile import JobSummary, ProfileBundle, Skill
from app.services.fallback_scorer import score_fallback, skill_level_label


class FallbackScorerTests(unittest.TestCase):
    def test_partial_profile_scenario(self):
        # 5/8 skills -> 25, experience 25, no education 5, no certification 0, project 10
        result = score_fallback(partial_profile(), backend_job())

        self.assertEqual(result.match_score, 65)
        self.assertEqual(result.source, "fallback")
        self.assertEqual(
            [item.skill for item in result.skill_gap.missing], ["kubernetes", "graphql", "redis"]
        )
        self.assertTrue(all(item.importance == "medium" for item in result.skill_gap.missing))
        self.assertEqual(
            [(item.skill, item.level) for item in result.skill_gap.existing],
            [
                ("python", "expert"),
                ("django", "intermediate"),
                ("sql", "beginner"),
                ("docker", "beginner"),
                ("aws", "expert"),
            ],
        )

    def test_empty_profile_scenario(self):
        job = JobSummary(title="Data Analyst", required_skills=["SQL", "Excel", "Tableau"])
        result = score_fallback(ProfileBundle(), job)

        self.assertEqual(result.match_score, 15)
        self.assertEqual(
            [(item.skill, item.importance) for item in result.skill_gap.missing],
            [("sql", "medium"), ("excel", "medium"), ("tableau", "medium")],
        )
        self.assertEqual(result.skill_gap.existing, [])

    def test_job_without_skills(self):
        result = score_fallback(full_profile(), JobSummary(title="Generalist"))

        self.assertEqual(result.match_score, 60)
        self.assertEqual(result.skill_gap.missing, [])
        self.assertEqual(result.skill_gap.existing, [])

    def test_complete_profile_reaches_but_never_exceeds_100(self):
        job = JobSummary(title="Backend", required_skills=["python"])
        self.assertEqual(score_fallback(full_profile(), job).match_score, 100)

    def test_rounds_half_up(self):
        skills = [f"skill{i:02d}" for i in range(16)]
        profile = ProfileBundle(skills=[Skill(name=name) for name in skills[:3]])
        # 3/16 * 40 = 7.5, plus 10 + 5
        result = score_fallback(profile, JobSummary(title="Wide", required_skills=skills))
        self.assertEqual(result.match_score, 23)

    def test_existing_only_contains_job_skills(self):
        job = backend_job()
        job_skills = {skill.lower() for skill in job.required_skills}
        result = score_fallback(partial_profile(), job)

        for item in result.skill_gap.existing:
            self.assertIn(item.skill, job_skills)
        self.assertNotIn("figma", [item.skill for item in result.skill_gap.existing])

    def test_containment_works_both_ways(self):
        job = JobSummary(title="Web", required_skills=["React Native", "CSS"])
        profile = ProfileBundle(skills=[Skill(name="react", level=60), Skill(name="Tailwind CSS", level=50)])
        result = score_fallback(profile, job)

        self.assertEqual(
            [(item.skill, item.level) for item in result.skill_gap.existing],
            [("react native", "intermediate"), ("css", "intermediate")],
        )
        self.assertEqual(result.skill_gap.missing, [])

    def test_blank_skill_names_match_nothing(self):
        job = JobSummary(title="Ops", required_skills=["Linux"])
        result = score_fallback(ProfileBundle(skills=[Skill(name="  ")]), job)
        self.assertEqual(result.skill_gap.existing, [])
        self.assertEqual(len(result.skill_gap.missing), 1)

    def test_level_labels(self):
        self.assertEqual(skill_level_label(70), "expert")
        self.assertEqual(skill_level_label(69), "intermediate")
        self.assertEqual(skill_level_label(50), "intermediate")
        self.assertEqual(skill_level_label(49), "beginner")
        self.assertEqual(skill_level_label(0), "beginner")
        self.assertEqual(skill_level_label(None), "beginner")

    def test_recommendation_template(self):
        result = score_fallback(partial_profile(), backend_job())
        html = result.recommendation

        self.assertIn("<strong>65% match</strong>", html)
        for heading in (
            "Evaluation Summary",
            "Candidate Strengths",
            "Areas to Improve",
            "Concrete Action Steps",
            "Preparation Timeline",
        ):
            self.assertIn(f"<h3>{heading}</h3>", html)
        self.assertIn("<li>Has relevant work experience</li>", html)
        self.assertIn("<li>Has a strong project portfolio</li>", html)
        self.assertNotIn("Holds relevant certifications", html)
        self.assertIn("python, django, sql, docker, aws", html)
        self.assertIn("Focus on: kubernetes, graphql, redis.", html)
        self.assertEqual(html, score_fallback(partial_profile(), backend_job()).recommendation)

    def test_recommendation_limits_listed_skills(self):
        skills = [f"tool{i}" for i in range(8)]
        result = score_fallback(ProfileBundle(), JobSummary(title="Many", required_skills=skills))

        self.assertIn("<strong>tool4</strong>", result.recommendation)
        self.assertNotIn("<strong>tool5</strong>", result.recommendation)
        self.assertIn("Focus on: tool0, tool1, tool2.", result.recommendation)

    def test_score_is_bounded_for_many_shapes(self):
        job = backend_job()
        for profile in (ProfileBundle(), partial_profile(), full_profile()):
            score = score_fallback(profile, job).match_score
            self.assertGreaterEqual(score, 0)
            self.assertLessEqual(score, 100)


if __name__ == "__main__":
    unittest.main()
