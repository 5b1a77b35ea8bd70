"""
Curated verse-of-the-day list.

Day ``n`` of the year uses ``CURATED_VERSES[(n - 1) % len(CURATED_VERSES)]``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class CuratedVerse:
    book: str
    chapter: int
    verse: int
    text: str
    theme: str
    version: str = "nvi"


CURATED_VERSES: Tuple[CuratedVerse, ...] = (
    CuratedVerse("jo", 3, 16, "Porque Deus tanto amou o mundo que deu o seu Filho Unigênito, para que todo o que nele crer não pereça, mas tenha a vida eterna.", "amor"),
    CuratedVerse("sl", 23, 1, "O Senhor é o meu pastor; de nada terei falta.", "confiança"),
    CuratedVerse("fp", 4, 13, "Tudo posso naquele que me fortalece.", "força"),
    CuratedVerse("pv", 3, 5, "Confie no Senhor de todo o seu coração e não se apoie em seu próprio entendimento.", "confiança"),
    CuratedVerse("is", 41, 10, "Por isso não tema, pois estou com você; não tenha medo, pois sou o seu Deus.", "coragem"),
    CuratedVerse("rm", 8, 28, "Sabemos que Deus age em todas as coisas para o bem daqueles que o amam.", "esperança"),
    CuratedVerse("jr", 29, 11, "Porque sou eu que conheço os planos que tenho para vocês, diz o Senhor, planos de fazê-los prosperar e não de causar dano, planos de dar a vocês esperança e um futuro.", "esperança"),
    CuratedVerse("mt", 11, 28, "Venham a mim, todos os que estão cansados e sobrecarregados, e eu darei descanso a vocês.", "descanso"),
    CuratedVerse("sl", 46, 1, "Deus é o nosso refúgio e a nossa fortaleza, auxílio sempre presente na adversidade.", "refúgio"),
    CuratedVerse("js", 1, 9, "Seja forte e corajoso! Não se apavore nem desanime, pois o Senhor, o seu Deus, estará com você por onde você andar.", "coragem"),
    CuratedVerse("1co", 13, 4, "O amor é paciente, o amor é bondoso.", "amor"),
    CuratedVerse("gl", 5, 22, "Mas o fruto do Espírito é amor, alegria, paz, paciência, amabilidade, bondade, fidelidade.", "espírito"),
    CuratedVerse("sl", 119, 105, "A tua palavra é lâmpada que ilumina os meus passos e luz que clareia o meu caminho.", "palavra"),
    CuratedVerse("mt", 6, 33, "Busquem, pois, em primeiro lugar o Reino de Deus e a sua justiça, e todas essas coisas serão acrescentadas a vocês.", "prioridades"),
    CuratedVerse("is", 40, 31, "Mas aqueles que esperam no Senhor renovam as suas forças. Voam alto como águias.", "força"),
    CuratedVerse("rm", 12, 2, "Não se amoldem ao padrão deste mundo, mas transformem-se pela renovação da sua mente.", "transformação"),
    CuratedVerse("hb", 11, 1, "Ora, a fé é a certeza daquilo que esperamos e a prova das coisas que não vemos.", "fé"),
    CuratedVerse("sl", 37, 5, "Entregue o seu caminho ao Senhor; confie nele, e ele agirá.", "confiança"),
    CuratedVerse("2tm", 1, 7, "Pois Deus não nos deu espírito de covardia, mas de poder, de amor e de equilíbrio.", "coragem"),
    CuratedVerse("1pe", 5, 7, "Lancem sobre ele toda a sua ansiedade, porque ele tem cuidado de vocês.", "paz"),
    CuratedVerse("jo", 14, 27, "Deixo-lhes a paz; a minha paz lhes dou. Não a dou como o mundo a dá.", "paz"),
    CuratedVerse("lm", 3, 22, "Graças ao grande amor do Senhor é que não somos consumidos, pois as suas misericórdias são inesgotáveis.", "misericórdia"),
    CuratedVerse("mq", 6, 8, "Ele mostrou a você, ó homem, o que é bom e o que o Senhor exige: pratique a justiça, ame a fidelidade e ande humildemente com o seu Deus.", "justiça"),
    CuratedVerse("sl", 121, 2, "O meu socorro vem do Senhor, que fez os céus e a terra.", "socorro"),
    CuratedVerse("ef", 2, 8, "Pois vocês são salvos pela graça, por meio da fé, e isto não vem de vocês, é dom de Deus.", "graça"),
    CuratedVerse("tg", 1, 5, "Se algum de vocês tem falta de sabedoria, peça-a a Deus, que a todos dá livremente, de boa vontade.", "sabedoria"),
    CuratedVerse("jo", 8, 12, "Eu sou a luz do mundo. Quem me segue nunca andará em trevas, mas terá a luz da vida.", "luz"),
    CuratedVerse("sl", 27, 1, "O Senhor é a minha luz e a minha salvação; de quem terei temor?", "confiança"),
    CuratedVerse("mt", 5, 9, "Bem-aventurados os pacificadores, pois serão chamados filhos de Deus.", "paz"),
    CuratedVerse("cl", 3, 23, "Tudo o que fizerem, façam de todo o coração, como para o Senhor, e não para os homens.", "trabalho"),
    CuratedVerse("1jo", 4, 19, "Nós amamos porque ele nos amou primeiro.", "amor"),
    CuratedVerse("sl", 34, 8, "Provem e vejam como o Senhor é bom. Como é feliz o homem que nele se refugia!", "bondade"),
    CuratedVerse("is", 26, 3, "Tu, Senhor, guardarás em perfeita paz aquele cujo propósito está firme, porque em ti confia.", "paz"),
    CuratedVerse("rm", 15, 13, "Que o Deus da esperança os encha de toda alegria e paz, por sua confiança nele.", "esperança"),
    CuratedVerse("pv", 16, 3, "Consagre ao Senhor tudo o que você faz, e os seus planos serão bem-sucedidos.", "planos"),
    CuratedVerse("sl", 91, 1, "Aquele que habita no abrigo do Altíssimo e descansa à sombra do Todo-poderoso.", "proteção"),
    CuratedVerse("2co", 5, 17, "Portanto, se alguém está em Cristo, é nova criação. As coisas antigas já passaram; eis que surgiram coisas novas!", "renovação"),
    CuratedVerse("fp", 4, 6, "Não andem ansiosos por coisa alguma, mas em tudo, pela oração e súplicas, e com ação de graças, apresentem seus pedidos a Deus.", "oração"),
    CuratedVerse("ne", 8, 10, "Não se entristeçam, porque a alegria do Senhor os fortalecerá.", "alegria"),
    CuratedVerse("ap", 21, 4, "Ele enxugará dos seus olhos toda lágrima. Não haverá mais morte, nem tristeza, nem choro, nem dor.", "esperança"),
)


def curated_for_day(day_of_year: int) -> CuratedVerse:
    return CURATED_VERSES[(day_of_year - 1) % len(CURATED_VERSES)]


def find_curated(book: str, chapter: int, verse: int) -> Optional[CuratedVerse]:
    for item in CURATED_VERSES:
        if item.book == book and item.chapter == chapter and item.verse == verse:
            return item
    return None
