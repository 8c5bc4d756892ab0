from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_store
from ..schemas.feature import Feature as FeatureSchema, FeatureCreate
from ..store import EntityStore

router = APIRouter()


@router.get("/features", response_model=List[FeatureSchema])
def get_features(project_id: str, store: EntityStore = Depends(get_store)):
    """Get all features of a project in creation order."""
    if not store.get_project(project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return store.list_features(project_id)


@router.post("/features", response_model=FeatureSchema, status_code=status.HTTP_201_CREATED)
def create_feature(feature: FeatureCreate, store: EntityStore = Depends(get_store)):
    """Create a new feature."""
    if not store.get_project(feature.project_id):
        raise HTTPException(status_code=404, detail="Project not found")

    name = feature.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Feature name is required")
    if store.get_feature_by_name(feature.project_id, name):
        raise HTTPException(status_code=409, detail=f'Feature "{name}" already exists in this project')
    return store.create_feature(feature.project_id, name)


@router.get("/features/{feature_id}", response_model=FeatureSchema)
def get_feature(feature_id: str, store: EntityStore = Depends(get_store)):
    feature = store.get_feature(feature_id)
    if not feature:
        raise HTTPException(status_code=404, detail="Feature not found")
    return feature


@router.delete("/features/{feature_id}")
def delete_feature(feature_id: str, store: EntityStore = Depends(get_store)):
    """Delete a feature along with its tasks."""
    feature = store.get_feature(feature_id)
    if not feature:
        raise HTTPException(status_code=404, detail="Feature not found")
    store.delete_feature(feature)
    return {"message": "Feature deleted successfully"}
