# catalog/seed.py

from .models import Category, ReasonerInput, ScenarioInput

DEFAULT_REASONERS = [
    ReasonerInput(
        name="Vampire Prover",
        description="First-order logic theorem prover",
        url="https://vprover.github.io/",
        category=Category.SCENE_GRAPHS,
    ),
    ReasonerInput(
        name="E Prover",
        description="Equational theorem prover",
        url="https://www.eprover.org/",
        category=Category.SCENE_GRAPHS,
    ),
    ReasonerInput(
        name="SPASS Prover",
        description="Automated theorem prover",
        url="https://www.mpi-inf.mpg.de/departments/automation-of-logic/software/spass-workbench/",
        category=Category.ROBOT_WORLD,
    ),
    ReasonerInput(
        name="Prover9",
        description="First-order resolution theorem prover",
        url="https://www.cs.unm.edu/~mccune/mace4/",
        category=Category.ROBOT_WORLD,
    ),
]

# Robot Meets World
DEFAULT_SCENARIOS = [
    ScenarioInput(
        title="Kitchen Navigation Scenario",
        description="A service robot must navigate through a busy kitchen to deliver food while avoiding moving staff and hot surfaces",
        content=(
            "A service robot must navigate through a busy kitchen to deliver food while avoiding moving staff "
            "and hot surfaces. The robot needs to understand spatial relationships, predict human movement "
            "patterns, and maintain safe distances from hazardous areas."
        ),
        category=Category.ROBOT_WORLD,
    ),
    ScenarioInput(
        title="Human Collaboration",
        description="A robot assistant works alongside humans in an assembly line, coordinating actions and responding to verbal commands",
        content=(
            "A robot assistant works alongside humans in an assembly line, coordinating actions and responding "
            "to verbal commands. The system requires real-time communication, task understanding, and adaptive "
            "behavior based on human preferences and workflow changes."
        ),
        category=Category.ROBOT_WORLD,
    ),
    ScenarioInput(
        title="Emergency Response",
        description="During an emergency evacuation, robots must adapt their behavior to guide people safely while maintaining communication",
        content=(
            "During an emergency evacuation, robots must adapt their behavior to guide people safely while "
            "maintaining communication with emergency services. The robots need to handle stress, uncertainty, "
            "and dynamic environmental conditions while prioritizing human safety."
        ),
        category=Category.ROBOT_WORLD,
    ),
]


def seed_defaults(repository) -> None:
    """Loads the default reasoners and scenarios into an empty repository."""
    for reasoner in DEFAULT_REASONERS:
        repository.create_reasoner(reasoner)
    for scenario in DEFAULT_SCENARIOS:
        repository.create_scenario(scenario)
