"""System prompts and prompt builders for the study assistant.

All prompts are in Brazilian Portuguese since the app's readers are.
"""

from typing import Any, Dict, List, Optional, Sequence

STUDY_SYSTEM_PROMPT = (
    "Você é um teólogo e professor de Bíblia experiente, com profundo conhecimento das Escrituras, "
    "de hermenêutica, do contexto histórico e cultural e das línguas originais (hebraico e grego).\n\n"
    "FOCO ABSOLUTO: responda apenas sobre o texto bíblico em estudo e a pergunta feita. "
    "Quando houver um livro, capítulo ou versículo em foco, fundamente a resposta nesse texto antes de "
    "trazer outras passagens.\n\n"
    "Diretrizes:\n"
    "- Cite referências bíblicas (livro, capítulo e versículo) que sustentem cada ponto.\n"
    "- Explique o contexto histórico e literário quando ajudar a compreensão.\n"
    "- Apresente interpretações divergentes com respeito, sem impor uma tradição.\n"
    "- Termine com uma aplicação prática curta para a vida devocional.\n"
    "- Se a pergunta não tiver relação com a Bíblia ou a fé cristã, redirecione com gentileza ao estudo."
)

REFERENCE_NOTE = (
    "\n\n---\n*Para aprofundar, consulte as referências bíblicas citadas e compare diferentes versões.*"
)

SEARCH_SYSTEM_PROMPT = (
    "Você é um especialista em Bíblia que ajuda a encontrar passagens por tema, sentimento ou ideia.\n"
    "Dada a consulta do usuário, devolva um resumo curto do que a Bíblia ensina sobre o assunto e "
    "de 3 a 8 passagens relevantes.\n"
    "Use as abreviações em português dos livros (gn, ex, sl, pv, mt, jo, rm, ...).\n"
    "Para cada passagem informe a referência legível (por exemplo 'João 3:16'), a abreviação do livro, "
    "capítulo, versículo, o texto na versão NVI e a relevância: 'Alta', 'Média' ou 'Relacionado'."
)

LESSON_SYSTEM_PROMPT = (
    "Você é um especialista em educação cristã e elabora aulas bíblicas para escola dominical, "
    "pequenos grupos e seminários. Produza conteúdo fiel ao texto bíblico, didático e aplicável."
)

TEACHER_ASSISTANT_SYSTEM_PROMPT = (
    "Você é um assistente pedagógico para professores de Bíblia. Ajude a planejar aulas, sugerir "
    "dinâmicas, explicar passagens difíceis, preparar perguntas de discussão e adaptar o conteúdo "
    "para diferentes faixas etárias. Seja prático, organizado e baseado nas Escrituras."
)

DISCUSSION_QUESTION_SYSTEM_PROMPT = (
    "Você é um líder de estudo bíblico experiente. Crie UMA pergunta reflexiva e aberta que "
    "estimule o grupo a compartilhar experiências e aplicar o texto à vida. "
    "Responda apenas com a pergunta, sem introdução."
)

SYNTHESIS_SYSTEM_PROMPT = (
    "Você é um facilitador de estudos bíblicos em grupo. Sua tarefa é sintetizar as respostas dos "
    "participantes com sensibilidade pastoral, valorizando cada contribuição e conectando-as às Escrituras."
)

SYNTHESIS_SECTIONS = (
    "## Temas Identificados",
    "## Destaques da Discussão",
    "## Reflexão Integradora",
    "## Aplicação Prática",
    "## Para Continuar Estudando",
)


def build_study_prompt(
    question: str,
    *,
    book: Optional[str] = None,
    chapter: Optional[int] = None,
    verse: Optional[int] = None,
    verse_text: Optional[str] = None,
    chapter_verses: Optional[Sequence[Dict[str, Any]]] = None,
    context_verse_limit: int = 15,
) -> str:
    lines: List[str] = []
    if book:
        lines.append(f"Livro: {book}")
    if chapter is not None:
        lines.append(f"Capítulo: {chapter}")
    if verse is not None:
        lines.append(f"Versículo em foco: {verse}")
    if verse_text:
        lines.append(f'Texto: "{verse_text}"')
    if chapter_verses:
        lines.append("Contexto do capítulo:")
        for item in list(chapter_verses)[:context_verse_limit]:
            lines.append(f"{item.get('number')}. {item.get('text')}")

    if not lines:
        return question
    context = "\n".join(lines)
    return f"{context}\n\nPergunta: {question}"


def build_lesson_prompt(
    *,
    title: str,
    scripture_base: str,
    duration: int,
    objectives_count: int,
    question_count: int,
    content_block_count: int,
) -> str:
    return (
        f"Crie o conteúdo de uma aula bíblica de {duration} minutos.\n"
        f"Título: {title}\n"
        f"Base bíblica: {scripture_base}\n\n"
        "Atenção: 'Jó' é o livro do Antigo Testamento e 'João' é o Evangelho; não confunda os dois.\n\n"
        f"Gere exatamente {objectives_count} objetivos de aprendizagem, "
        f"{content_block_count} blocos de conteúdo (cada um com título e texto desenvolvido) e "
        f"{question_count} perguntas de revisão com a resposta esperada.\n"
        "Inclua também uma descrição curta da aula."
    )


def build_teacher_prompt(question: str, context: Optional[str] = None) -> str:
    if context:
        return f"Contexto da aula: {context}\n\nPergunta do professor: {question}"
    return question


def build_discussion_question_prompt(
    *,
    title: str,
    description: Optional[str] = None,
    verse_reference: Optional[str] = None,
    verse_text: Optional[str] = None,
) -> str:
    lines = [f"Tema: {title}"]
    if description:
        lines.append(f"Descrição: {description}")
    if verse_reference:
        lines.append(f"Referência: {verse_reference}")
    if verse_text:
        lines.append(f'Texto: "{verse_text}"')
    return "\n".join(lines)


def format_answers(answers: Sequence[Dict[str, Any]]) -> str:
    """Render group answers as a numbered list, hiding anonymous authors."""
    rendered = []
    for index, answer in enumerate(answers, start=1):
        if answer.get("is_anonymous"):
            name = "Anônimo"
        else:
            name = answer.get("author_name") or "Membro"
        line = f'{index}. {name}: "{answer.get("content", "")}"'
        if answer.get("verse_reference"):
            line += f" ({answer['verse_reference']})"
        rendered.append(line)
    return "\n".join(rendered)


def build_synthesis_prompt(
    *,
    title: str,
    question: str,
    answers: Sequence[Dict[str, Any]],
    verse_reference: Optional[str] = None,
    verse_text: Optional[str] = None,
) -> str:
    header = [f"Discussão: {title}", f"Pergunta: {question}"]
    if verse_reference:
        header.append(f"Referência: {verse_reference}")
    if verse_text:
        header.append(f'Texto: "{verse_text}"')
    sections = "\n".join(SYNTHESIS_SECTIONS)
    return (
        "\n".join(header)
        + f"\n\nRespostas dos participantes ({len(answers)}):\n"
        + format_answers(answers)
        + "\n\nEscreva a síntese em Markdown usando exatamente estas seções:\n"
        + sections
    )
