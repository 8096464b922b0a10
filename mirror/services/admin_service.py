# mirror/services/admin_service.py
"""관리자 통계

공개(숨기지 않은) 분석 기준 점수/장르 분포, 사진별 분석 수 통계,
사진마다 최신 분석만 남기는 중복 정리.
"""
from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from mirror.core.logger import logger
from mirror.models.analysis import Analysis
from mirror.models.opinion import Opinion
from mirror.models.photo import Photo
from mirror.services.persona_service import CATEGORIES

SCORE_BUCKET = 10


def _bucket(score) -> int:
    return int(score // SCORE_BUCKET) * SCORE_BUCKET


def _visible_analyses(db: Session):
    return db.query(Analysis).filter(Analysis.is_hidden.is_(False))


def get_score_distribution(db: Session) -> dict:
    """종합 점수와 카테고리 점수의 10점 단위 분포"""
    score_range = ((Analysis.overall_score // SCORE_BUCKET) * SCORE_BUCKET).label("score_range")
    overall_rows = db.query(score_range, func.count(Analysis.id))\
        .filter(Analysis.is_hidden.is_(False), Analysis.overall_score.isnot(None))\
        .group_by("score_range")\
        .order_by("score_range")\
        .all()

    # category_scores(JSON)는 파이썬에서 집계
    counters = {category: {} for category in CATEGORIES}
    for (scores,) in _visible_analyses(db).with_entities(Analysis.category_scores):
        for category in CATEGORIES:
            value = (scores or {}).get(category)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                continue
            bucket = _bucket(value)
            counters[category][bucket] = counters[category].get(bucket, 0) + 1

    return {
        "overall_scores": [{"score": int(r[0]), "count": r[1]} for r in overall_rows],
        "category_scores": {
            category: [{"score": s, "count": c} for s, c in sorted(counts.items())]
            for category, counts in counters.items()
        },
    }


def get_genre_distribution(db: Session) -> dict:
    """장르별 분석 수와 평균 점수"""
    count = func.count(Analysis.id).label("count")
    genre_rows = db.query(Analysis.detected_genre, count)\
        .filter(Analysis.is_hidden.is_(False), Analysis.detected_genre.isnot(None))\
        .group_by(Analysis.detected_genre)\
        .order_by(desc("count"), Analysis.detected_genre)\
        .all()

    average = func.avg(Analysis.overall_score).label("average_score")
    score_rows = db.query(Analysis.detected_genre, average)\
        .filter(Analysis.is_hidden.is_(False), Analysis.detected_genre.isnot(None))\
        .group_by(Analysis.detected_genre)\
        .order_by(desc("average_score"), Analysis.detected_genre)\
        .all()

    return {
        "genres": [{"name": r[0], "count": r[1]} for r in genre_rows],
        "average_scores_by_genre": [
            {"genre": r[0], "average_score": round(float(r[1]), 1)} for r in score_rows
        ],
    }


def get_analytics_stats(db: Session) -> dict:
    """전체 사진/분석 수, 사진당 분석 수 통계"""
    total_photos = db.query(func.count(Photo.id)).scalar()
    total_analyses = db.query(func.count(Analysis.id)).scalar()

    per_photo = db.query(Analysis.photo_id, func.count(Analysis.id))\
        .group_by(Analysis.photo_id)\
        .all()
    multiple = sum(1 for _, n in per_photo if n > 1)

    return {
        "total_photos": total_photos,
        "total_analyses": total_analyses,
        # 사진마다 하나를 제외한 나머지
        "duplicate_analyses_count": total_analyses - len(per_photo),
        "photos_with": {
            "multiple_analyses": multiple,
            "single_analysis": len(per_photo) - multiple,
        },
    }


def cleanup_duplicate_analyses(db: Session) -> dict:
    """사진마다 최신 공개 분석만 남기고 나머지 공개 분석 삭제 (숨긴 분석은 유지)"""
    rank = func.row_number().over(
        partition_by=Analysis.photo_id,
        order_by=(Analysis.created_at.desc(), Analysis.id.desc()),
    ).label("row_rank")
    ranked = _visible_analyses(db).with_entities(Analysis.id, rank).subquery()

    rows = db.query(ranked.c.id, ranked.c.row_rank).all()
    stale_ids = [analysis_id for analysis_id, r in rows if r > 1]
    kept = len(rows) - len(stale_ids)

    if stale_ids:
        # 삭제되는 분석에 달린 의견은 분석 연결만 끊음
        db.query(Opinion)\
            .filter(Opinion.analysis_id.in_(stale_ids))\
            .update({Opinion.analysis_id: None}, synchronize_session=False)
        db.query(Analysis)\
            .filter(Analysis.id.in_(stale_ids))\
            .delete(synchronize_session=False)
        db.commit()

    logger.info(f"중복 분석 정리: {len(stale_ids)}개 삭제, {kept}개 유지")
    return {"deleted_count": len(stale_ids), "kept_count": kept}
