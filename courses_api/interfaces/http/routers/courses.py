from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from ....application.use_cases.manage_courses import CreateCourse, DeleteCourse, UpdateCourse
from ....application.validation import validate_course
from ....domain.errors import NotFoundError, ValidationError
from ....infrastructure.cache import get_cache, get_version, set_cache, invalidate_course
from ....infrastructure.db import get_db
from ....infrastructure.metrics import cache_hits_total, cache_misses_total
from ....infrastructure.repositories import CourseRepository
from ..authn import authenticate_request
from ..schemas import CourseIn, CourseOut

router = APIRouter(prefix="/api/courses", tags=["courses"])

@router.get("", response_model=list[CourseOut])
def list_courses(db: Session = Depends(get_db)):
    cache_key = "courses:list"
    cached = get_cache(cache_key)
    if cached is not None:
        cache_hits_total.inc()
        return cached

    cache_misses_total.inc()
    # версия до чтения из БД: если курс изменят во время чтения, в кэш не пишем
    version = get_version(cache_key)
    result = [CourseOut.model_validate(c) for c in CourseRepository(db).list()]
    set_cache(cache_key, [r.model_dump(by_alias=True) for r in result], version=version)
    return result

@router.get("/{course_id}", response_model=CourseOut)
def get_course(course_id: int, db: Session = Depends(get_db)):
    cache_key = f"course:{course_id}"
    cached = get_cache(cache_key)
    if cached is not None:
        cache_hits_total.inc()
        return cached

    cache_misses_total.inc()
    version = get_version(cache_key)
    course = CourseRepository(db).get_by_id(course_id)
    if course is None: raise NotFoundError("No Course with this ID found.")
    result = CourseOut.model_validate(course)
    set_cache(cache_key, result.model_dump(by_alias=True), version=version)
    return result

# --- Изменения: валидация -> аутентификация -> существование -> владелец

@router.post("", status_code=status.HTTP_201_CREATED)
def create_course(payload: CourseIn, request: Request, db: Session = Depends(get_db)):
    data = payload.model_dump(by_alias=True, exclude_unset=True)
    errors = validate_course(data)
    if errors: raise ValidationError(errors)
    identity = authenticate_request(request, db)

    course = CreateCourse(CourseRepository(db)).execute(identity, data)
    invalidate_course(course.id)
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": f"/api/courses/{course.id}"})

@router.put("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_course(course_id: int, payload: CourseIn, request: Request, db: Session = Depends(get_db)):
    data = payload.model_dump(by_alias=True, exclude_unset=True)
    errors = validate_course(data)
    if errors: raise ValidationError(errors)
    identity = authenticate_request(request, db)

    UpdateCourse(CourseRepository(db)).execute(identity, course_id, data)
    invalidate_course(course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_course(course_id: int, request: Request, db: Session = Depends(get_db)):
    identity = authenticate_request(request, db)

    DeleteCourse(CourseRepository(db)).execute(identity, course_id)
    invalidate_course(course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
