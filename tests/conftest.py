import pytest

from app.core.dataset import Loading, set_dataset
from app.main import app


SAMPLE_CSV = """PassengerId,Survived,Pclass,Name,Sex,Age,SibSp,Parch,Ticket,Fare,Cabin,Embarked
1,0,3,"Braund, Mr. Owen Harris",male,22,1,0,A/5 21171,7.25,,S
2,1,1,"Cumings, Mrs. John Bradley (Florence Briggs Thayer)",female,38,1,0,PC 17599,71.2833,C85,C
3,1,3,"Heikkinen, Miss. Laina",female,26,0,0,STON/O2. 3101282,7.925,,S
7,0,1,"McCarthy, Mr. Timothy J",male,54,0,0,17463,51.8625,E46,S
6,0,3,"Moran, Mr. James",male,,0,0,330877,8.4583,,Q
"""


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV


@pytest.fixture(autouse=True)
def reset_state():
    yield
    set_dataset(Loading())
    app.dependency_overrides.clear()
