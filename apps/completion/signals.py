from django.dispatch import Signal

# Sent after a learner's criterion completion is recorded.
# Receivers get `completion` (a CriterionCompletion).
criterion_completed = Signal()
