from typing import List

from ..schemas.command import CommandContext, CommandResult
from ..schemas.feature import Feature as FeatureSchema
from ..store import EntityStore
from .common import NO_ACTIVE_PROJECT, active_project, dump, fail, ok


def new_feature(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    """new feature [name]"""
    project = active_project(context, store)
    if not project:
        return fail(NO_ACTIVE_PROJECT)

    feature_name = " ".join(args)
    if not feature_name:
        return fail("Feature name is required")

    if store.get_feature_by_name(project.id, feature_name):
        return fail(f'Feature "{feature_name}" already exists in this project')

    feature = store.create_feature(project.id, feature_name)
    feature_ids = [f.id for f in store.list_features(project.id)]
    feature_number = feature_ids.index(feature.id) + 1

    return ok(
        f"Created feature #{feature_number}: {feature_name}",
        feature=dump(FeatureSchema, feature),
    )


def list_features(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    project = active_project(context, store)
    if not project:
        return fail(NO_ACTIVE_PROJECT)

    features = store.list_features(project.id)
    if not features:
        return ok("No features yet. Create one with: new feature [name]")

    feature_list = "\n".join(f"[{i}] {f.name}" for i, f in enumerate(features, start=1))
    return ok(
        f"Your features:\n{feature_list}",
        features=[dump(FeatureSchema, f) for f in features],
    )
