# src/toolkit_dev/core/context.py
"""
Contexto de uma invocação de resolução.

O `ResolutionContext` substitui o canal implícito de variáveis de
ambiente usado entre funções por um objeto explícito, criado por
invocação e passado adiante pelas etapas (load, validate, merge,
render).

Responsabilidades do módulo:
    - Manter identidade da invocação
    - Registrar eventos de log estruturados por etapa
    - Coletar warnings não fatais agrupados por etapa

Invariantes:
    - Eventos sempre incluem `run_id` e `stage`
    - Warnings são agrupados por `stage` preservando a ordem de inserção
    - Warnings também são registrados como eventos de nível WARNING

Limites explícitos:
    - Não decide políticas de execução
    - Não persiste eventos (a CLI os encaminha ao `logging`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import uuid4


@dataclass
class ResolutionContext:
    run_id: str = field(default_factory=lambda: uuid4().hex[:12])
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, stage: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "stage": stage,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, stage: str, message: str) -> None:
        if stage not in self.warnings:
            self.warnings[stage] = []
        self.warnings[stage].append(message)
        self.log(stage=stage, level="WARNING", message=message)
