import pytest

from nutrichat_app.nutrition.keyword_gate import passes_consumption_gate, passes_calorie_gate, passes_gates


@pytest.mark.parametrize("text", [
    "I ate a burger",
    "Just had some oatmeal",
    "What I drank this morning: orange juice",
    "FOR LUNCH it was a salad",
    "Bugün pilav yedim",
    "My snack was an apple",
])
def test_consumption_gate_matches(text):
    assert passes_consumption_gate(text)


@pytest.mark.parametrize("text", [
    "How do I cook quinoa?",
    "Tell me about vitamin D",
    "",
    None,
])
def test_consumption_gate_rejects(text):
    assert not passes_consumption_gate(text)


def test_consumption_gate_ignores_negation():
    assert passes_consumption_gate("I didn't eat the cake, I just had water")


@pytest.mark.parametrize("text", [
    "That is about 350 calories.",
    "Roughly 200kcal",
    "Calories: 120",
    "The total for your meal comes to 640 calories",
    "Estimated calories for the bowl: 500",
])
def test_calorie_gate_matches(text):
    assert passes_calorie_gate(text)


@pytest.mark.parametrize("text", [
    "Quinoa is a great source of protein.",
    "Eat more vegetables!",
    "",
    None,
])
def test_calorie_gate_rejects(text):
    assert not passes_calorie_gate(text)


def test_both_gates_required():
    assert passes_gates("I ate toast", "About 80 calories")
    assert not passes_gates("What is toast?", "About 80 calories")
    assert not passes_gates("I ate toast", "Toast is bread.")
