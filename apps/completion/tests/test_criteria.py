"""Tests for the activity completion criterion."""

from django.core.exceptions import ValidationError
from django.test import override_settings

from apps.completion.criteria import ActivityCriterion
from apps.completion.exceptions import CriteriaConfigurationError, UnsupportedCriteriaType
from apps.completion.models import (
    ActivityCompletion,
    CompletionCriterion,
    CriterionCompletion,
)
from apps.completion.signals import criterion_completed
from apps.courses.models import Activity, ActivityType, Course

from .base import CompletionTestCase


class ActivityCriterionReviewTests(CompletionTestCase):
    """Tests for ActivityCriterion.review."""

    def test_review_complete_state_returns_true_and_marks(self):
        self.info.update_state(self.quiz, self.learner, ActivityCompletion.State.COMPLETE)
        completion = self.completion_for(self.learner)

        self.assertTrue(self.criterion.review(completion))

        stored = CriterionCompletion.objects.get(criterion=self.criterion, user=self.learner)
        self.assertTrue(stored.is_complete())
        self.assertEqual(stored.course, self.course)

    def test_review_complete_pass_state_returns_true(self):
        self.info.update_state(
            self.quiz, self.learner, ActivityCompletion.State.COMPLETE_PASS
        )

        self.assertTrue(self.criterion.review(self.completion_for(self.learner)))

    def test_review_complete_fail_state_returns_false(self):
        self.info.update_state(
            self.quiz, self.learner, ActivityCompletion.State.COMPLETE_FAIL
        )

        self.assertFalse(self.criterion.review(self.completion_for(self.learner)))
        self.assertFalse(CriterionCompletion.objects.exists())

    def test_review_incomplete_state_returns_false(self):
        self.info.update_state(self.quiz, self.learner, ActivityCompletion.State.INCOMPLETE)

        self.assertFalse(self.criterion.review(self.completion_for(self.learner)))
        self.assertFalse(CriterionCompletion.objects.exists())

    def test_review_without_activity_record_returns_false(self):
        self.assertFalse(self.criterion.review(self.completion_for(self.learner)))

    def test_review_without_mark_does_not_persist(self):
        self.info.update_state(self.quiz, self.learner, ActivityCompletion.State.COMPLETE)
        completion = self.completion_for(self.learner)

        self.assertTrue(self.criterion.review(completion, mark=False))

        self.assertIsNone(completion.time_completed)
        self.assertFalse(CriterionCompletion.objects.exists())

    def test_review_keeps_original_completion_time(self):
        self.info.update_state(self.quiz, self.learner, ActivityCompletion.State.COMPLETE)
        completion = self.completion_for(self.learner)
        self.criterion.review(completion)
        first_time = completion.time_completed

        self.assertTrue(self.criterion.review(completion))

        completion.refresh_from_db()
        self.assertEqual(completion.time_completed, first_time)
        self.assertEqual(CriterionCompletion.objects.count(), 1)

    def test_review_sends_completed_signal_once(self):
        received = []

        def handler(sender, completion, **kwargs):
            received.append(completion)

        criterion_completed.connect(handler)
        self.addCleanup(criterion_completed.disconnect, handler)
        self.info.update_state(self.quiz, self.learner, ActivityCompletion.State.COMPLETE)
        completion = self.completion_for(self.learner)

        self.criterion.review(completion)
        self.criterion.review(completion)

        self.assertEqual(received, [completion])


class ActivityCriterionConfigTests(CompletionTestCase):
    """Tests for fetching and configuring activity criteria."""

    def test_fetch_returns_matching_activity_criterion(self):
        fetched = ActivityCriterion.fetch(course=self.course, module_instance=self.quiz)

        self.assertIsInstance(fetched, ActivityCriterion)
        self.assertEqual(fetched.pk, self.criterion.pk)

    def test_fetch_ignores_other_criteria_types(self):
        CompletionCriterion.objects.create(
            course=self.course, criteria_type=CompletionCriterion.CriteriaType.SELF
        )

        self.assertIsNone(ActivityCriterion.fetch(module_instance=self.assignment))
        self.assertEqual(ActivityCriterion.objects.filter(course=self.course).count(), 1)

    def test_save_sets_type_and_module_name(self):
        criterion = ActivityCriterion.objects.create(
            course=self.course, module_instance=self.assignment
        )

        self.assertEqual(criterion.criteria_type, CompletionCriterion.CriteriaType.ACTIVITY)
        self.assertEqual(criterion.module, "assign")

    def test_update_config_creates_criteria_for_new_activities(self):
        criteria = ActivityCriterion.update_config(
            self.course, [self.quiz.pk, self.assignment.pk]
        )

        self.assertEqual(len(criteria), 2)
        self.assertEqual(ActivityCriterion.objects.filter(course=self.course).count(), 2)
        assign_criterion = ActivityCriterion.fetch(module_instance=self.assignment)
        self.assertEqual(assign_criterion.module, "assign")

    def test_update_config_keeps_existing_criterion_and_records(self):
        self.info.update_state(self.quiz, self.learner, ActivityCompletion.State.COMPLETE)
        self.criterion.review(self.completion_for(self.learner))

        ActivityCriterion.update_config(self.course, [str(self.quiz.pk)])

        self.assertTrue(ActivityCriterion.objects.filter(pk=self.criterion.pk).exists())
        self.assertEqual(CriterionCompletion.objects.count(), 1)

    def test_update_config_removes_deselected_criteria(self):
        ActivityCriterion.update_config(self.course, [self.assignment.pk])

        self.assertFalse(ActivityCriterion.objects.filter(pk=self.criterion.pk).exists())
        self.assertIsNotNone(ActivityCriterion.fetch(module_instance=self.assignment))

    def test_update_config_rejects_activity_from_other_course(self):
        other_course = Course.objects.create(title="Other Course")
        other_activity = Activity.objects.create(
            course=other_course, activity_type=self.quiz_type, name="Other Quiz"
        )

        with self.assertRaises(CriteriaConfigurationError):
            ActivityCriterion.update_config(self.course, [other_activity.pk])

        self.assertTrue(ActivityCriterion.objects.filter(pk=self.criterion.pk).exists())

    def test_update_config_rejects_untracked_activity(self):
        page = Activity.objects.create(
            course=self.course,
            activity_type=ActivityType.objects.create(name="page"),
            name="Welcome Page",
            completion=Activity.CompletionTracking.NONE,
        )

        with self.assertRaises(CriteriaConfigurationError):
            ActivityCriterion.update_config(self.course, [self.quiz.pk, page.pk])

        self.assertIsNone(ActivityCriterion.fetch(module_instance=page))
        self.assertTrue(ActivityCriterion.objects.filter(pk=self.criterion.pk).exists())

    def test_rows_without_activity_are_not_activity_criteria(self):
        CompletionCriterion.objects.create(
            course=self.course, criteria_type=CompletionCriterion.CriteriaType.ACTIVITY
        )

        self.assertEqual(
            list(ActivityCriterion.objects.filter(course=self.course)), [self.criterion]
        )

    def test_clean_requires_activity_for_activity_criteria(self):
        criterion = CompletionCriterion(
            course=self.course, criteria_type=CompletionCriterion.CriteriaType.ACTIVITY
        )

        with self.assertRaises(ValidationError) as ctx:
            criterion.full_clean()

        self.assertIn("module_instance", ctx.exception.message_dict)

    def test_clean_allows_other_types_without_activity(self):
        CompletionCriterion(
            course=self.course, criteria_type=CompletionCriterion.CriteriaType.SELF
        ).full_clean()

    def test_get_mod_name(self):
        self.assertEqual(ActivityCriterion.get_mod_name(self.quiz_type.pk), "quiz")

    def test_get_mod_instance(self):
        self.assertEqual(self.criterion.get_mod_instance(), self.quiz)

    def test_get_mod_instance_with_mismatched_type_returns_none(self):
        self.criterion.module = "assign"

        self.assertIsNone(self.criterion.get_mod_instance())

    def test_get_config_label(self):
        self.assertEqual(
            ActivityCriterion.get_config_label(self.quiz), "Quiz - Week 1 Quiz"
        )

    def test_as_evaluator_returns_activity_criterion(self):
        stored = CompletionCriterion.objects.get(pk=self.criterion.pk)

        evaluator = stored.as_evaluator()

        self.assertIsInstance(evaluator, ActivityCriterion)
        self.assertEqual(evaluator.pk, self.criterion.pk)
        self.assertEqual(evaluator.module_instance, self.quiz)

    def test_as_evaluator_unsupported_type_raises(self):
        stored = CompletionCriterion.objects.create(
            course=self.course, criteria_type=CompletionCriterion.CriteriaType.GRADE
        )

        with self.assertRaises(UnsupportedCriteriaType):
            stored.as_evaluator()


@override_settings(SITE_URL="https://lms.example.com")
class ActivityCriterionReportTests(CompletionTestCase):
    """Tests for report titles and details."""

    def test_titles(self):
        self.assertEqual(self.criterion.get_title(), "Activities completed")
        self.assertEqual(self.criterion.get_type_title(), "Activities")
        self.assertEqual(self.criterion.get_title_detailed(), "Week 1 Quiz")

    def test_title_detailed_decodes_name(self):
        self.quiz.name = "Week%201+Quiz"
        self.quiz.save()

        self.assertEqual(self.criterion.get_title_detailed(), "Week 1 Quiz")

    def test_title_detailed_shortens_long_names_at_word_boundary(self):
        self.quiz.name = "Introduction to programming with Python"
        self.quiz.save()

        self.assertEqual(
            self.criterion.get_title_detailed(), "Introduction to programming..."
        )

    def test_title_detailed_drops_partial_word(self):
        self.quiz.name = "Week one: variables and expressions"
        self.quiz.save()

        self.assertEqual(self.criterion.get_title_detailed(), "Week one: variables and...")

    def test_title_detailed_cuts_single_long_word(self):
        self.quiz.name = "A" * 40
        self.quiz.save()

        self.assertEqual(self.criterion.get_title_detailed(), "A" * 27 + "...")

    def test_details_for_automatic_completion(self):
        details = self.criterion.get_details(self.completion_for(self.learner))

        self.assertEqual(details["type"], "Activities completed")
        self.assertEqual(
            details["criteria"],
            f'<a href="https://lms.example.com/mod/quiz/view/{self.quiz.pk}/">Week 1 Quiz</a>',
        )
        self.assertEqual(details["requirement"], "Viewing the quiz, Achieving grade")
        self.assertEqual(details["status"], "")

    def test_details_for_manual_completion(self):
        criterion = ActivityCriterion.objects.create(
            course=self.course, module_instance=self.assignment
        )

        details = criterion.get_details(self.completion_for(self.learner, criterion))

        self.assertEqual(details["requirement"], "Marking yourself complete")

    def test_details_without_tracking_has_no_requirement(self):
        self.quiz.completion = Activity.CompletionTracking.NONE
        self.quiz.save()

        details = self.criterion.get_details(self.completion_for(self.learner))

        self.assertEqual(details["requirement"], "")

    def test_details_escapes_activity_name(self):
        self.quiz.name = "Quiz <1>"
        self.quiz.save()

        details = self.criterion.get_details(self.completion_for(self.learner))

        self.assertIn(">Quiz &lt;1&gt;</a>", details["criteria"])
