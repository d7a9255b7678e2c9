from datetime import date

from support import TempDatabaseTestCase, backend_job, full_profile

from app.schemas.profile import Certification, Education, Experience, ProfileBundle, Project, Skill
from app.storage import job_store, profile_store


class ProfileStoreTests(TempDatabaseTestCase):
    def test_unknown_user_gets_empty_lists(self):
        bundle = profile_store.get_profile_bundle("nobody")
        self.assertEqual(bundle, ProfileBundle())
        self.assertEqual(bundle.skills, [])

    def test_round_trip_and_ordering(self):
        profile_store.save_profile_bundle(
            "user-1",
            ProfileBundle(
                skills=[Skill(name="Go", level=40), Skill(name="Rust")],
                experiences=[
                    Experience(title="Old", company="A", start_date=date(2015, 1, 1), end_date=date(2017, 1, 1)),
                    Experience(title="New", company="B", start_date=date(2020, 1, 1), is_current=True),
                ],
                educations=[
                    Education(school="Undated"),
                    Education(school="Early", start_date=date(2010, 9, 1), end_date=date(2014, 6, 1)),
                    Education(school="Late", start_date=date(2016, 9, 1)),
                ],
                certifications=[
                    Certification(name="First", issuer="X", issue_date=date(2018, 1, 1)),
                    Certification(name="Second", issuer="Y", issue_date=date(2022, 1, 1), expiry_date=date(2025, 1, 1)),
                ],
                projects=[Project(name="Newest"), Project(name="Older", description="d")],
            ),
        )
        bundle = profile_store.get_profile_bundle("user-1")

        self.assertEqual([s.name for s in bundle.skills], ["Go", "Rust"])
        self.assertIsNone(bundle.skills[1].level)
        self.assertEqual([e.title for e in bundle.experiences], ["New", "Old"])
        self.assertTrue(bundle.experiences[0].is_current)
        self.assertEqual([e.school for e in bundle.educations], ["Late", "Early", "Undated"])
        self.assertEqual([c.name for c in bundle.certifications], ["Second", "First"])
        self.assertEqual(bundle.certifications[0].expiry_date, date(2025, 1, 1))
        self.assertEqual([p.name for p in bundle.projects], ["Newest", "Older"])

    def test_save_replaces_previous_profile(self):
        profile_store.save_profile_bundle("user-1", full_profile())
        profile_store.save_profile_bundle("user-1", ProfileBundle(skills=[Skill(name="SQL", level=60)]))

        bundle = profile_store.get_profile_bundle("user-1")
        self.assertEqual([s.name for s in bundle.skills], ["SQL"])
        self.assertEqual(bundle.experiences, [])


class JobStoreTests(TempDatabaseTestCase):
    def test_create_and_fetch(self):
        job_id = job_store.create_job(backend_job())
        job = job_store.get_job_summary(job_id)

        self.assertEqual(job.title, "Backend Engineer")
        self.assertEqual(job.required_skills[:2], ["Python", "Django"])
        self.assertEqual(len(job.required_skills), 8)

    def test_unknown_job(self):
        self.assertIsNone(job_store.get_job_summary(123))
