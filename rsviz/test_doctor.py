# Environment self-check: the planner check must pass on a working install.
import doctor


def test_planner_check_passes():
    assert doctor.check_planner() is True
