from archdocs import config
from archdocs.ir.architecture import (
    Container,
    ContextRelationship,
    ExtractedArchitecture,
    Person,
    Relationship,
    SelfReference,
    SystemInfo,
)


def fallback_architecture(
    system_name: str = config.FALLBACK_SYSTEM_NAME,
    system_description: str = config.FALLBACK_SYSTEM_DESCRIPTION,
) -> ExtractedArchitecture:
    """
    Minimal architecture used when extraction is unavailable or malformed.

    Containers carry no responsibilities, so requirement content can never
    change what this produces beyond the system element's requirement ids.
    """
    return ExtractedArchitecture(
        system=SystemInfo(
            name=system_name,
            description=system_description,
            scope="To be defined",
        ),
        people=[
            Person(
                id="user",
                name="End User",
                role="User",
                description="Interacts with the system",
                interactions=["use system"],
            )
        ],
        external_systems=[],
        level1_relationships=[
            ContextRelationship(
                source="user",
                target=SelfReference(),
                label="Uses",
                protocol="HTTPS",
            )
        ],
        containers=[
            Container(
                id="webapp",
                name="Web Application",
                type="WebApp",
                technology="Web Browser",
                description="User interface",
                dependencies=["api"],
            ),
            Container(
                id="api",
                name="API",
                type="API",
                technology="REST API",
                description="Backend API",
            ),
        ],
        level2_relationships=[
            Relationship(
                source="webapp",
                target="api",
                label="Makes API calls",
                protocol="HTTPS",
            )
        ],
        components_by_container={},
        level3_relationships_by_container={},
    )
