from core.types import ProjectionMode
from ui_new.narratives import NARRATIVES, narrative_for


def test_every_mode_has_a_narrative():
    assert set(NARRATIVES) == set(ProjectionMode)
    for mode in ProjectionMode:
        story = narrative_for(mode)
        assert story.title
        assert story.body


def test_mode_bases():
    assert ProjectionMode.CENSUS.basis is ProjectionMode.CLASSIFICATION
    assert ProjectionMode.CENSUS.is_horizon_based
    assert ProjectionMode.SKY.is_horizon_based
    assert not ProjectionMode.GALAXY.is_horizon_based
    assert not ProjectionMode.HR_DIAGRAM.is_horizon_based
