"""Quiz Templates - Prompts para geracao de rascunhos de quiz."""

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

QUIZ_SYSTEM_PROMPT = """Você é um especialista em Engajamento e Quizzes virais. Responda APENAS com JSON válido, sem texto adicional."""

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

QUIZ_DRAFT_PROMPT = """Crie um Quiz divertido e viral sobre o tema: "{title}".
{context_line}
Gere exatamente {num_questions} perguntas com 4 opções de resposta cada.
Atribua pontos para cada opção (ex: resposta mais forte = 10, intermediária = 5-7, fraca = 0-3).
As perguntas devem ser envolventes, divertidas e criativas.

ALÉM DISSO, gere 3 a 4 "Resultados Possíveis" baseados na soma total de pontos.
Cada resultado deve ter um título criativo, uma descrição engajadora de 1-2 frases, e a faixa de pontuação (scoreMin e scoreMax).
As faixas de pontuação devem cobrir todas as pontuações possíveis sem lacunas e sem sobreposição.

SAÍDA OBRIGATÓRIA: Retorne APENAS um objeto JSON puro, sem markdown, sem blocos de código, sem explicações, neste formato exato:
{{
  "questions": [
    {{
      "title": "Texto da pergunta?",
      "options": [
        {{ "text": "Opção A", "points": 10 }},
        {{ "text": "Opção B", "points": 5 }},
        {{ "text": "Opção C", "points": 3 }},
        {{ "text": "Opção D", "points": 0 }}
      ]
    }}
  ],
  "results": [
    {{
      "title": "Iniciante Curioso",
      "description": "Você está apenas começando sua jornada...",
      "scoreMin": 0,
      "scoreMax": 20
    }},
    {{
      "title": "Mestre Supremo",
      "description": "Você domina este assunto!",
      "scoreMin": 21,
      "scoreMax": 50
    }}
  ]
}}"""

# =============================================================================
# CONSTANTES
# =============================================================================

MIN_DRAFT_QUESTIONS = 1
MAX_DRAFT_QUESTIONS = 20
DEFAULT_DRAFT_QUESTIONS = 5


def clamp_question_count(quantity: int | None, maximum: int = MAX_DRAFT_QUESTIONS) -> int:
    """Limita a quantidade pedida ao intervalo aceito (padrao: 5)."""
    if not quantity:
        return DEFAULT_DRAFT_QUESTIONS
    return min(max(int(quantity), MIN_DRAFT_QUESTIONS), maximum)


def format_draft_prompt(title: str, description: str | None, num_questions: int) -> str:
    """Monta o prompt de geracao de rascunho.

    Args:
        title: Tema do quiz
        description: Contexto adicional (opcional)
        num_questions: Quantidade de perguntas ja limitada

    Returns:
        Prompt pronto para o LLM
    """
    context_line = f'Contexto adicional: "{description.strip()}"' if description else ""
    return QUIZ_DRAFT_PROMPT.format(
        title=title.strip(),
        context_line=context_line,
        num_questions=num_questions,
    )
