"""Course catalog - display names and evaluation criteria for each course."""

from dataclasses import dataclass

from hybrid_selector.core.exceptions import UnknownCourseError
from hybrid_selector.core.types import CourseCriterion


@dataclass(frozen=True)
class CourseConfig:
    """Configuration for a course that projects are evaluated against."""

    course_id: str
    display_name: str
    criteria: tuple[CourseCriterion, ...]

    @property
    def max_score(self) -> int:
        """Total points available across all criteria."""
        return sum(c.max_score for c in self.criteria)


COURSES: dict[str, CourseConfig] = {
    "data-engineering": CourseConfig(
        course_id="data-engineering",
        display_name="Data Engineering Zoomcamp",
        criteria=(
            CourseCriterion(
                "Problem description",
                "0: The problem is not described, 1: The problem is described but shortly "
                "or not clearly, 2: The problem is well described and it's clear what the "
                "problem the project solves",
                2,
            ),
            CourseCriterion(
                "Cloud",
                "0: Cloud is not used, things run only locally, 2: The project is developed "
                "in the cloud, 4: The project is developed in the cloud and IaC tools are used",
                4,
            ),
            CourseCriterion(
                "Data Ingestion: Batch / Workflow orchestration",
                "0: No workflow orchestration, 2: Partial workflow orchestration: some steps "
                "are orchestrated, some run manually, 4: End-to-end pipeline: multiple steps "
                "in the DAG, uploading data to data lake",
                4,
            ),
            CourseCriterion(
                "Data Ingestion: Stream",
                "0: No streaming system (like Kafka, Pulsar, etc), 2: A simple pipeline with "
                "one consumer and one producer, 4: Using consumer/producers and streaming "
                "technologies (like Kafka streaming, Spark streaming, Flink, etc)",
                4,
            ),
            CourseCriterion(
                "Data warehouse",
                "0: No DWH is used, 2: Tables are created in DWH, but not optimized, 4: Tables "
                "are partitioned and clustered in a way that makes sense for the upstream "
                "queries (with explanation)",
                4,
            ),
            CourseCriterion(
                "Transformations (dbt, spark, etc)",
                "0: No transformations, 2: Simple SQL transformation (no dbt or similar "
                "tools), 4: Transformations are defined with dbt, Spark or similar technologies",
                4,
            ),
            CourseCriterion(
                "Dashboard",
                "0: No dashboard, 2: A dashboard with 1 tile, 4: A dashboard with 2 tiles",
                4,
            ),
            CourseCriterion(
                "Reproducibility",
                "0: No instructions how to run the code at all, 2: Some instructions are "
                "there, but they are not complete, 4: Instructions are clear, it's easy to "
                "run the code, and the code works",
                4,
            ),
        ),
    ),
    "machine-learning": CourseConfig(
        course_id="machine-learning",
        display_name="Machine Learning Zoomcamp",
        criteria=(
            CourseCriterion("Problem description", "Clear problem description", 2),
            CourseCriterion("EDA", "Exploratory data analysis", 2),
            CourseCriterion("Model training", "Model training implementation", 3),
            CourseCriterion("Exporting notebook to script", "Script export", 1),
            CourseCriterion("Reproducibility", "Reproducible setup", 2),
            CourseCriterion("Model deployment", "Model deployment", 2),
            CourseCriterion("Monitoring", "Model monitoring", 2),
            CourseCriterion("Best practices", "Code quality and testing", 2),
        ),
    ),
    "llm-zoomcamp": CourseConfig(
        course_id="llm-zoomcamp",
        display_name="LLM Zoomcamp",
        criteria=(
            CourseCriterion(
                "Problem description",
                "0 points: The problem is not described, 1 point: The problem is described "
                "but briefly or unclearly, 2 points: The problem is well-described and it's "
                "clear what problem the project solves",
                2,
            ),
            CourseCriterion(
                "Retrieval flow",
                "0 points: No knowledge base or LLM is used, 1 point: No knowledge base is "
                "used and the LLM is queried directly, 2 points: Both a knowledge base and an "
                "LLM are used in the flow",
                2,
            ),
            CourseCriterion(
                "Retrieval evaluation",
                "0 points: No evaluation of retrieval is provided, 1 point: Only one retrieval "
                "approach is evaluated, 2 points: Multiple retrieval approaches are evaluated "
                "and the best one is used",
                2,
            ),
            CourseCriterion(
                "LLM evaluation",
                "0 points: No evaluation of final LLM output is provided, 1 point: Only one "
                "approach (e.g. one prompt) is evaluated, 2 points: Multiple approaches are "
                "evaluated and the best one is used",
                2,
            ),
            CourseCriterion(
                "Interface",
                "0 points: No way to interact with the application at all, 1 point: Command "
                "line interface a script or a Jupyter notebook, 2 points: UI (e.g. Streamlit) "
                "web application (e.g. Django) or an API (e.g. built with FastAPI)",
                2,
            ),
            CourseCriterion(
                "Ingestion pipeline",
                "0 points: No ingestion, 1 point: Semi-automated ingestion of the dataset into "
                "the knowledge base e.g. with a Jupyter notebook, 2 points: Automated "
                "ingestion with a Python script or a special tool (e.g. Mage dlt Airflow Prefect)",
                2,
            ),
            CourseCriterion(
                "Monitoring",
                "0 points: No monitoring, 1 point: User feedback is collected OR there's a "
                "monitoring dashboard, 2 points: User feedback is collected and there's a "
                "dashboard with at least 5 charts",
                2,
            ),
            CourseCriterion(
                "Containerization",
                "0 points: No containerization, 1 point: Dockerfile is provided for the main "
                "application OR there's a docker-compose for the dependencies only, 2 points: "
                "Everything is in docker-compose",
                2,
            ),
            CourseCriterion(
                "Reproducibility",
                "0 points: No instructions on how to run the code the data is missing or it's "
                "unclear how to access it, 1 point: Some instructions are provided but are "
                "incomplete OR instructions are clear and complete the code works but the "
                "data is missing, 2 points: Instructions are clear the dataset is accessible "
                "it's easy to run the code and it works. The versions for all dependencies "
                "are specified",
                2,
            ),
            CourseCriterion(
                "Best practices",
                "Hybrid search: combining both text and vector search (at least evaluating "
                "it) (1 point), Document re-ranking (1 point), User query rewriting (1 point). "
                "Total 3 points possible.",
                3,
            ),
            CourseCriterion(
                "Bonus points",
                "Deployment to the cloud (2 points), Up to 3 extra bonus points if you want "
                "to award for something extra (write in feedback for what). Total 5 points "
                "possible.",
                5,
            ),
        ),
    ),
    "mlops": CourseConfig(
        course_id="mlops",
        display_name="MLOps Zoomcamp",
        criteria=(
            CourseCriterion("Problem description", "Clear problem description", 2),
            CourseCriterion("Workflow orchestration", "Pipeline orchestration", 4),
            CourseCriterion("Model deployment", "Model deployment implementation", 4),
            CourseCriterion("Model monitoring", "Monitoring and alerting", 4),
            CourseCriterion("Reproducibility", "Reproducible setup", 4),
            CourseCriterion("Best practices", "Code quality and testing", 4),
        ),
    ),
    "stock-markets": CourseConfig(
        course_id="stock-markets",
        display_name="Stock Markets Analytics Zoomcamp",
        criteria=(
            CourseCriterion("Problem description", "Clear problem description", 4),
            CourseCriterion("Data ingestion", "Market data ingestion", 4),
            CourseCriterion("Backtesting", "Strategy backtesting", 4),
            CourseCriterion("Automation", "Trading automation", 5),
            CourseCriterion("Bonus points", "Additional features", 7),
        ),
    ),
}

# Course ids that share a semantic course type
COURSE_TYPE_ALIASES: dict[str, str] = {
    "mlops": "mlops",
    "data-engineering": "data-engineering",
    "llm": "llm",
    "llm-zoomcamp": "llm",
}


def get_course(course_id: str) -> CourseConfig:
    """
    Get course configuration by id.

    Raises:
        UnknownCourseError: If the course is not in the catalog
    """
    course = COURSES.get(course_id)
    if course is None:
        raise UnknownCourseError(course_id)
    return course


def get_course_criteria(course_id: str) -> list[CourseCriterion]:
    """Return the criteria for a course, or an empty list for unknown courses."""
    course = COURSES.get(course_id)
    return list(course.criteria) if course else []


def get_course_name(course_id: str) -> str:
    """Return the display name for a course, falling back to the id itself."""
    course = COURSES.get(course_id)
    return course.display_name if course else course_id


def course_type_for(course_id: str) -> str:
    """Map a course id to the course type used by semantic scoring."""
    return COURSE_TYPE_ALIASES.get(course_id, "general")
