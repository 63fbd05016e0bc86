"""Historical personas loaded into an empty catalog at startup."""

from persona_chat.database.records import Category, Persona

PERSONAS = [
    Persona(
        id=1,
        name="Albert Einstein",
        lifespan="1879-1955",
        category=Category.SCIENCE,
        description="Theoretical physicist who developed the theory of relativity and helped found quantum theory.",
        image_url="https://upload.wikimedia.org/wikipedia/commons/d/d3/Albert_Einstein_Head.jpg",
    ),
    Persona(
        id=2,
        name="Marie Curie",
        lifespan="1867-1934",
        category=Category.SCIENCE,
        description="Physicist and chemist, pioneer of research on radioactivity and the first person to win two Nobel Prizes.",
        image_url="https://upload.wikimedia.org/wikipedia/commons/c/c8/Marie_Curie_c._1920s.jpg",
    ),
    Persona(
        id=3,
        name="Socrates",
        lifespan="c. 470-399 BC",
        category=Category.PHILOSOPHY,
        description="Athenian philosopher credited as a founder of Western philosophy, known for his method of questioning.",
        image_url="https://upload.wikimedia.org/wikipedia/commons/b/bc/Socrates_Louvre.jpg",
    ),
    Persona(
        id=4,
        name="Confucius",
        lifespan="551-479 BC",
        category=Category.PHILOSOPHY,
        description="Chinese teacher and philosopher whose teachings on ethics, family and government shaped East Asian thought.",
        image_url="https://upload.wikimedia.org/wikipedia/commons/2/2a/Konfuzius-1770.jpg",
    ),
    Persona(
        id=5,
        name="Abraham Lincoln",
        lifespan="1809-1865",
        category=Category.POLITICS,
        description="16th President of the United States, who led the nation through the Civil War and abolished slavery.",
        image_url="https://upload.wikimedia.org/wikipedia/commons/a/ab/Abraham_Lincoln_O-77_matte_collodion_print.jpg",
    ),
    Persona(
        id=6,
        name="Cleopatra",
        lifespan="69-30 BC",
        category=Category.POLITICS,
        description="Last active ruler of the Ptolemaic Kingdom of Egypt, a skilled diplomat and naval commander.",
        image_url="https://upload.wikimedia.org/wikipedia/commons/3/3e/Kleopatra-VII.-Altes-Museum-Berlin1.jpg",
    ),
    Persona(
        id=7,
        name="Leonardo da Vinci",
        lifespan="1452-1519",
        category=Category.ARTS,
        description="Renaissance painter, engineer and inventor, creator of the Mona Lisa and The Last Supper.",
        image_url="https://upload.wikimedia.org/wikipedia/commons/b/ba/Leonardo_self.jpg",
    ),
    Persona(
        id=8,
        name="Wolfgang Amadeus Mozart",
        lifespan="1756-1791",
        category=Category.ARTS,
        description="Prolific composer of the Classical period who wrote more than 600 works, including operas and symphonies.",
        image_url="https://upload.wikimedia.org/wikipedia/commons/4/47/Croce-Mozart-Detail.jpg",
    ),
    Persona(
        id=9,
        name="William Shakespeare",
        lifespan="1564-1616",
        category=Category.LITERATURE,
        description="English playwright and poet, author of Hamlet, Macbeth and Romeo and Juliet.",
        image_url="https://upload.wikimedia.org/wikipedia/commons/a/a2/Shakespeare.jpg",
    ),
    Persona(
        id=10,
        name="Jane Austen",
        lifespan="1775-1817",
        category=Category.LITERATURE,
        description="English novelist known for Pride and Prejudice and her sharp commentary on the British gentry.",
        image_url="https://upload.wikimedia.org/wikipedia/commons/c/cc/CassandraAusten-JaneAusten%28c.1810%29_hires.jpg",
    ),
    Persona(
        id=11,
        name="Marco Polo",
        lifespan="1254-1324",
        category=Category.EXPLORATION,
        description="Venetian merchant and traveller whose account of the court of Kublai Khan introduced Asia to Europe.",
        image_url="https://upload.wikimedia.org/wikipedia/commons/5/54/Marco_Polo_portrait.jpg",
    ),
    Persona(
        id=12,
        name="Amelia Earhart",
        lifespan="1897-1937",
        category=Category.EXPLORATION,
        description="Aviation pioneer and the first woman to fly solo across the Atlantic Ocean.",
        image_url="https://upload.wikimedia.org/wikipedia/commons/b/bb/Amelia_Earhart_standing_under_nose_of_her_Lockheed_Model_10-E_Electra.jpg",
    ),
]
