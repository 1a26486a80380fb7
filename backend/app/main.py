from typing import Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from exactsolver import config
from exactsolver.elimination import eliminate
from exactsolver.engine import solve_linear_system
from exactsolver.extract import solve_system
from exactsolver.operations import determinant, inverse

app = FastAPI(title="ExactSolver API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Cell = Union[int, float]


class MatrixRequest(BaseModel):
    matrix: list[list[Cell]]


class SolveRequest(MatrixRequest):
    method: Optional[str] = None
    variables: Optional[list[str]] = None


class EliminateRequest(MatrixRequest):
    method: Optional[str] = None


class StepInfo(BaseModel):
    description: str
    expression: str
    explanation: str
    matrix: Optional[list[list[str]]] = None


class SolveResponse(BaseModel):
    equation: str
    steps: list[StepInfo]
    final_answer: str
    verification_steps: list[StepInfo]
    summary: dict


class EliminationStepInfo(BaseModel):
    matrix: list[list[str]]
    operation: str
    description: str


class EliminateResponse(BaseModel):
    result: list[list[str]]
    steps: list[EliminationStepInfo]


class ClassifyResponse(BaseModel):
    classification: str
    free_variables: list[int]


class DeterminantResponse(BaseModel):
    determinant: str
    decimal: float


def _check_size(matrix: list, extra_columns: int) -> None:
    limit = config.get_setting("max_dimension")
    if not matrix or not matrix[0]:
        raise HTTPException(status_code=400, detail="Matrix cannot be empty.")
    if any(len(row) != len(matrix[0]) for row in matrix):
        raise HTTPException(
            status_code=400,
            detail="All rows must have the same number of entries.",
        )
    if len(matrix) > limit or len(matrix[0]) > limit + extra_columns:
        raise HTTPException(
            status_code=400,
            detail=f"Matrix is too large (at most {limit} unknowns and {limit} equations).",
        )


def _call(fn, *args, **kwargs):
    try:
        return fn(*args, **kwargs)
    except (ValueError, TypeError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Solver error: {str(e)}")


@app.post("/api/solve", response_model=SolveResponse)
def solve(req: SolveRequest):
    _check_size(req.matrix, extra_columns=1)
    return _call(solve_linear_system, req.matrix, method=req.method,
                 var_names=req.variables)


@app.post("/api/eliminate", response_model=EliminateResponse)
def eliminate_matrix(req: EliminateRequest):
    _check_size(req.matrix, extra_columns=1)
    return _call(eliminate, req.matrix, req.method).to_dict()


@app.post("/api/classify", response_model=ClassifyResponse)
def classify(req: MatrixRequest):
    _check_size(req.matrix, extra_columns=1)
    solution = _call(solve_system, req.matrix)
    return {
        "classification": solution.classification.value,
        "free_variables": solution.free_variables,
    }


@app.post("/api/determinant", response_model=DeterminantResponse)
def matrix_determinant(req: MatrixRequest):
    _check_size(req.matrix, extra_columns=0)
    det = _call(determinant, req.matrix)
    return {"determinant": str(det), "decimal": det.to_decimal()}


@app.post("/api/inverse", response_model=EliminateResponse)
def matrix_inverse(req: MatrixRequest):
    _check_size(req.matrix, extra_columns=0)
    return _call(inverse, req.matrix).to_dict()
