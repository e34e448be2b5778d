import pytest
from ubuntu_ssh.exceptions import ConfigurationError
from ubuntu_ssh.utils.tags import get_default_tags, merge_tags

def test_default_tags_name_the_project_and_environment():
    assert get_default_tags("demo", "prod") == {
        "Project": "demo",
        "Environment": "prod",
        "ManagedBy": "Pulumi",
    }

def test_default_environment_is_dev():
    assert get_default_tags("demo")["Environment"] == "dev"

def test_user_tags_are_added_and_win_on_conflict():
    merged = merge_tags(get_default_tags("demo"), {"Owner": "ops", "Environment": "sandbox"})

    assert merged == {
        "Project": "demo",
        "Environment": "sandbox",
        "ManagedBy": "Pulumi",
        "Owner": "ops",
    }

@pytest.mark.parametrize("custom", [None, {}])
def test_no_user_tags_returns_a_copy_of_defaults(custom):
    defaults = get_default_tags("demo")

    merged = merge_tags(defaults, custom)
    merged["Owner"] = "ops"

    assert "Owner" not in defaults

def test_merge_does_not_mutate_inputs():
    defaults = get_default_tags("demo")
    custom = {"Owner": "ops"}

    merge_tags(defaults, custom)

    assert defaults == get_default_tags("demo")
    assert custom == {"Owner": "ops"}

@pytest.mark.parametrize("custom", [
    {"aws:cloudformation:stack-name": "x"},
    {"AWS:Owner": "x"},
    {"": "x"},
    {"k" * 129: "x"},
    {"Owner": "v" * 257},
])
def test_tags_ec2_would_reject_raise(custom):
    with pytest.raises(ConfigurationError):
        merge_tags(get_default_tags("demo"), custom)

def test_tags_at_the_length_limits_are_accepted():
    merged = merge_tags({}, {"k" * 128: "v" * 256})

    assert merged == {"k" * 128: "v" * 256}
